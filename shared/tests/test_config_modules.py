"""Checks on the configuration package."""

from __future__ import annotations

import importlib

from django.test import SimpleTestCase


class ConfigDocstringTests(SimpleTestCase):
    def test_module_docstrings_are_ascii(self) -> None:
        for name in ("config", "config.urls", "config.settings", "config.settings.base"):
            with self.subTest(module=name):
                doc = importlib.import_module(name).__doc__ or ""
                self.assertTrue(doc.isascii(), doc)
