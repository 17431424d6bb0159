# SPDX-License-Identifier: MIT
"""Filesystem utilities."""
