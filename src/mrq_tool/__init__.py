"""Marquee tool - command-line front end."""
