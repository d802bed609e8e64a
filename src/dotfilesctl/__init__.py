"""Declarative dotfiles management through a content store and home-directory symlinks."""

__version__ = "0.3.0"
