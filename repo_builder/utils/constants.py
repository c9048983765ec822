"""
Central constants for the repo-builder package.

This module consolidates all constants used throughout the codebase
to eliminate magic numbers and strings.
"""

# ============================================================================
# Repository Layout Constants
# ============================================================================

# Architecture directories are named binary-<arch>
ARCH_DIR_PREFIX = "binary-"

# Plain and compressed package index file names
PACKAGES_FILENAME = "Packages"
PACKAGES_GZ_FILENAME = "Packages.gz"

# Release manifest file name (lives one level above the component directory)
RELEASE_FILENAME = "Release"

# Number of path segments between the repository root and a component directory
# e.g. <root>/dists/xenial/mongodb-org/3.4/multiverse
REPOSITORY_ROOT_DEPTH = 5

# Permissions for created directories and files
DIRECTORY_MODE = 0o755
FILE_MODE = 0o644

# gzip compression level for Packages.gz
GZIP_COMPRESSION_LEVEL = 9

# ============================================================================
# External Tool Constants
# ============================================================================

SCAN_PACKAGES_COMMAND = "dpkg-scanpackages"
SCAN_PACKAGES_ARGS = ["--multiversion"]

RELEASE_COMMAND = "apt-ftparchive"
RELEASE_ARGS = ["release", "../"]

# ============================================================================
# Signing and Output Constants
# ============================================================================

# Detached signature extension for Release files
RELEASE_SIGNATURE_EXTENSION = "gpg"

# OutputStore key prefixes
RELEASE_OUTPUT_KEY_PREFIX = "sign-release-file-"
NOTARY_OUTPUT_KEY_PREFIX = "notary-sign-"

# Notary signing endpoint, relative to the configured notary URL
NOTARY_SIGN_ENDPOINT = "/api/sign"

# Default notary request timeout (seconds)
DEFAULT_NOTARY_TIMEOUT = 120.0

# ============================================================================
# Index Page Constants
# ============================================================================

INDEX_PAGE_FILENAME = "index.html"

# ============================================================================
# Configuration and Execution Constants
# ============================================================================

DEFAULT_CONFIG_PATH = "~/.config/repo-builder/config.toml"

# Default number of concurrent repository jobs
DEFAULT_MAX_WORKERS = 4

# Job type suffix used in job identifiers
DEB_JOB_SUFFIX = "deb-repo"

# ============================================================================
# Logging and Display Constants
# ============================================================================

# Maximum log line length (characters)
MAX_LOG_LINE_LENGTH = 114
