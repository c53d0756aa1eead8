"""Common literal values used across sui_pages.

These constants keep reserved attribute names and source tokens centralized so
the builder, the assembler, and tests can import the same values without
drifting. Intended for internal use within the sui_pages package.

Examples
--------
>>> from sui_pages import _constants
>>> _constants.PROP_PREFIX.format(name="title")
's:prop:title'
>>> _constants.PAGE_COMPONENT
'__page'
"""

COMPONENT_ATTR = "is"
PARSED_ATTR = "parsed"
INTERNAL_ATTR_PREFIX = "s:"
NAMESPACE_ATTR = "s:ns"
COMPONENT_NAME_ATTR = "s:cn"
READY_ATTR = "s:ready"
PROP_PREFIX = "s:prop:{name}"
JIT_ATTR = "s:jit"
JIT_ROOT_ATTR = "s:root"
TRANS_ATTR = "s:trans"
TRANS_NODE_ATTR = "s:trans-node"
TRANS_ATTRS_ATTR = "s:trans-attrs"

SPREAD_PREFIX = "..."
TRANSLATION_SENTINEL = "::"
ASSETS_TOKEN = "@assets"
PAGE_COMPONENT = "__page"
DOCUMENT_PLACEHOLDER = "{{ __page }}"
