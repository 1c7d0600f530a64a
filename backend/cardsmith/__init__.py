"""Cardsmith — digital business card engine: editor model, renderer and card API."""
