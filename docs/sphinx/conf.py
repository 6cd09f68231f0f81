# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for the MarkerScan documentation."""

project = "MarkerScan"
author = "MarkerScan Contributors"
release = "0.1.0"

extensions: list[str] = ["sphinx.ext.autodoc", "sphinx.ext.napoleon"]
autodoc_member_order = "bysource"

html_theme = "alabaster"
