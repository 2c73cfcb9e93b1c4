"""Common literal values used across site_contracts.

These constants keep schema identifiers, reserved document keys, and contract
filenames centralized so the validator, the page-schema builder, the loader,
and tests can import the same values without drifting. Intended for internal
use within the site_contracts package.

Examples
--------
>>> from site_contracts import _constants
>>> _constants.PAGE_SCHEMA_ID
'SitePage@v1'
>>> "Text@v1.schema.json".endswith(_constants.SCHEMA_FILE_SUFFIX)
True
"""

LAYOUT_SCHEMA_ID = "Layout@v1"
PAGE_SCHEMA_ID = "SitePage@v1"
JSON_SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"

# Region metadata key holding wrapper classes; never a slot name.
REGION_META_KEY = "_tw"
# Instance key holding extra wrapper classes for a single component.
INSTANCE_WRAP_KEY = "_wrapTw"

SCHEMA_FILE_SUFFIX = ".schema.json"
LAYOUT_SCHEMA_FILENAME = "layout.schema.json"
CONTRACTS_DIRNAME = "contracts"
COMPONENT_CONTRACTS_DIRNAME = "components"
