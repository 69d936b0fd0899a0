"""Descarga el último backup correcto de un servidor del panel Pterodactyl."""

__version__ = "0.1.0"
