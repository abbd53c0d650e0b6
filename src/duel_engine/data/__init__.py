"""Packaged default data files (battle config, enemy roster)."""
