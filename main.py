#!/usr/bin/env python3
"""
Main entry point for the SphereIRC client
"""

from sphereirc.main import run

if __name__ == "__main__":
    run()
