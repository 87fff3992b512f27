"""Notebook (caderno) reservation and evaluation service."""
