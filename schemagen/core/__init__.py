# SPDX-License-Identifier: MIT
"""Core generation step: sources, staleness, arguments, orchestration."""
