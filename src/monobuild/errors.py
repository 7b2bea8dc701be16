"""Exception hierarchy shared by the graph core and the workspace layer."""
from __future__ import annotations


class MonobuildError(Exception):
    """Base class for every failure monobuild reports to its caller."""
