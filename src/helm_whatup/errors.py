"""Exceptions that abort a run."""

from __future__ import annotations


class WhatupError(Exception):
    """Base class for fatal run errors."""


class ReleaseSourceError(WhatupError):
    """The installed release list could not be obtained."""


class RepositoryConfigError(WhatupError):
    """Helm's repositories.yaml could not be loaded."""


class OutputFormatError(WhatupError):
    """The report could not be rendered in the requested format."""
