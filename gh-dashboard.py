#!/usr/bin/env python3
"""Thin executable entrypoint for the GitHub dashboard."""

from __future__ import annotations

from ghdash.app import main


if __name__ == "__main__":
    raise SystemExit(main())
