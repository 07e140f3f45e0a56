"""Common literal values used across guide_pages.

These constants keep delimiters, CSS hooks, and reference-site defaults
centralized so the renderer, registry, and tests can import the same values
without drifting. Intended for internal use within the guide_pages package.

Examples
--------
>>> from guide_pages import _constants
>>> _constants.ANCHOR_LABEL_TEMPLATE.format(title="Forms")
'Link to this section: Forms'
>>> _constants.DEFAULT_REFERENCE_BASE_URL
'https://docs.rs'
"""

FRONT_MATTER_DELIMITER = "---"
ANCHOR_LINK_CLASS = "anchor-link"
ANCHOR_LABEL_TEMPLATE = "Link to this section: {title}"
TABLE_CLASS = "table"
NAMESPACE_SEPARATOR = "::"
DEFAULT_REFERENCE_ROOT = "cot"
DEFAULT_REFERENCE_BASE_URL = "https://docs.rs"
EXTERNAL_LINK_REL = "noopener noreferrer"
MASTER_VERSION = "master"
LATEST_ALIAS = "latest"
GUIDE_MANIFEST_NAME = "guides.json"
