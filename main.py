#!/usr/bin/env python3
"""
pagescrape
Scrapes rendered web pages into structured or plain-text records
"""

from pagescrape.cli import app

if __name__ == "__main__":
    app()
