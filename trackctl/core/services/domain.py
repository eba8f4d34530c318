"""Domain resolution from the mutually exclusive -k / -u flags."""

from __future__ import annotations

from trackctl.core.errors import DomainNotSpecified
from trackctl.core.models.tracker import Domain


def resolve_domain(kernel: bool, userspace: bool) -> Domain:
    """Return the single domain selected by the flags.

    Raises:
        DomainNotSpecified: Neither or both flags are set.
    """
    if kernel == userspace:
        raise DomainNotSpecified()
    return Domain.KERNEL if kernel else Domain.USERSPACE
