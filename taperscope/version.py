# Version prefix
base_version = "0.3.0"
is_dev = "-" in base_version


def get_version() -> str:
    """Called at runtime.
    Development versions are suffixed with local build metadata
    (https://semver.org/#spec-item-10).
    """
    if is_dev:
        return base_version + "+local-build"
    return base_version
