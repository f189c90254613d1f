"""Common literal values used across mailblocks.

These constants keep layout defaults and merge-tag spellings centralized so
the section renderer, the flat template engine, and tests can import the same
values without drifting. Intended for internal use within the mailblocks
package.

Examples
--------
>>> from mailblocks import _constants
>>> _constants.DEFAULT_MAX_WIDTH
600
>>> _constants.UNSUBSCRIBE_MERGE_TAG
'{{ unsubscribe }}'
"""

DEFAULT_MAX_WIDTH = 600
DEFAULT_FONT_FAMILY = "Arial, 'Helvetica Neue', Helvetica, sans-serif"
DEFAULT_BACKGROUND_COLOR = "#f5f5f5"

# Merge tag understood by the email service provider at send time.
UNSUBSCRIBE_MERGE_TAG = "{{ unsubscribe }}"
# Placeholder authors type into link lists to request the merge tag above.
UNSUBSCRIBE_PLACEHOLDER = "{{unsubscribe_url}}"

PRODUCTS_PLACEHOLDER_TEXT = (
    "Products will appear here. Add product IDs to this section."
)
