"""Exception hierarchy for helm-tree.

Every error the CLI reports to the operator derives from ``HelmTreeError``.
Fatal errors are raised before any tree output is written.
"""

from __future__ import annotations


class HelmTreeError(Exception):
    """Base class for all helm-tree errors."""


class UnknownKindError(HelmTreeError):
    """A manifest kind has no match in the API catalog."""

    def __init__(self, kind: str) -> None:
        super().__init__(f'could not find api kind "{kind}"')
        self.kind = kind


class AmbiguousKindError(HelmTreeError):
    """A manifest kind matches resources in more than one API group."""

    def __init__(self, kind: str, candidates: list[str]) -> None:
        self.kind = kind
        self.candidates = sorted(candidates)
        super().__init__(
            f'ambiguous kind "{kind}". use one of these as the KIND disambiguate: '
            f"[{', '.join(self.candidates)}]"
        )


class ReleaseNotFoundError(HelmTreeError):
    """No stored record exists for the release."""

    def __init__(self, name: str, namespace: str) -> None:
        super().__init__(f'release "{name}" not found in namespace "{namespace}"')
        self.name = name
        self.namespace = namespace


class ReleaseDecodeError(HelmTreeError):
    """A stored release record could not be decoded."""


class UnsupportedDriverError(HelmTreeError):
    """HELM_DRIVER names a storage backend helm-tree cannot read."""

    def __init__(self, driver: str) -> None:
        super().__init__(f'unsupported helm storage driver "{driver}" (use secret or configmap)')
        self.driver = driver


class ClusterQueryError(HelmTreeError):
    """Listing a resource type failed."""

    def __init__(self, resource: str, cause: Exception) -> None:
        super().__init__(f"error while querying {resource}: {cause}")
        self.resource = resource
        self.cause = cause


class ComponentError(HelmTreeError):
    """Raised when a mandatory component fails to start."""

    def __init__(self, component: str, cause: Exception) -> None:
        super().__init__(f"Component '{component}' failed to start: {cause}")
        self.component = component
        self.cause = cause
