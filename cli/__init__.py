"""CLI package for the Spotify top tracks client

This package provides the command-line skin: serve the page, inspect the
stored session, print top tracks and log out. The entry point is
``cli.main:main``.
"""
