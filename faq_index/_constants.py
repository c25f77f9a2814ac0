"""Common literal values used across faq_index.

These constants keep marker tokens, filenames, and defaults centralized so the
synchronizer, assembler, and tests share the same values without drifting.
Intended for internal use within the faq_index package.

Examples
--------
>>> from faq_index import _constants
>>> _constants.UPDATE_HERE_TEMPLATE.format(path="/questions/a/en-US.mdx")
'<!-- Update here: /questions/a/en-US.mdx -->'
>>> _constants.QUESTIONS_START
'<!-- QUESTIONS:START -->'
"""

TOC_START = "<!-- TABLE_OF_CONTENTS:START -->"
TOC_END = "<!-- TABLE_OF_CONTENTS:END -->"
QUESTIONS_START = "<!-- QUESTIONS:START -->"
QUESTIONS_END = "<!-- QUESTIONS:END -->"
UPDATE_HERE_TEMPLATE = "<!-- Update here: {path} -->"

DEFAULT_CONFIG_FILE = "faq-index.yaml"
DEFAULT_README = "README.md"
DEFAULT_QUESTIONS_DIR = "questions"
DEFAULT_LOCALE = "en-US"
DEFAULT_MANIFEST_PATH = "questions/manifest.yaml"
FRAGMENT_SUFFIX = ".mdx"
METADATA_FILENAME = "metadata.json"
DEFAULT_SUMMARY_HEADING = "## TL;DR"
DEFAULT_TOC_ANCHOR = "table-of-contents"
DEFAULT_PROMO = (
    "Try out [Angular coding questions]"
    "(https://www.greatfrontend.com/questions/angular-interview-questions?gnrs=github)"
    " on [GreatFrontEnd](https://www.greatfrontend.com?gnrs=github)."
)
