# Copyright 2026 Neotoken Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for the neotoken documentation."""

project = "neotoken"
author = "Neotoken Contributors"
release = "0.1.0"

extensions: list[str] = ["sphinx.ext.autodoc", "sphinx.ext.napoleon"]
autodoc_mock_imports = ["pydantic", "yaml"]

html_theme = "alabaster"
