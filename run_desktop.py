#!/usr/bin/env python
"""Desktop app entrypoint for DebtBook."""

import flet as ft

from debtbook.desktop.app import main

if __name__ == "__main__":
    ft.app(target=main)
