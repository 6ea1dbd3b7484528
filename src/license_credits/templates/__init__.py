"""Bundled Jinja2 templates for credits documents."""
