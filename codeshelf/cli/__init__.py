"""Codeshelf CLI — Typer-based maintenance interface.

Provides the ``codeshelf`` command with subcommands for deriving and
locating identifiers, deploying sources, checksumming build trees,
migrating legacy user trees and listing user projects.

All output uses Rich for formatted terminal display.
"""
