from __future__ import annotations

# ---------------------------
# Calculator API
# ---------------------------
# Paths are appended to Settings.api_base_url.

CALCULATE_PATH = "/api/v1/calculate"
EXPRESSIONS_PATH = "/api/v1/expressions"
EXPRESSION_PATH = "/api/v1/expressions/{id}"


# ---------------------------
# User-facing messages
# ---------------------------
# Literal templates shown to the user. Keep them stable.

SUBMIT_SUCCESS = "Expression submitted successfully! ID: {id}"
SUBMIT_FAILED = "Failed to submit expression: {message}"

LIST_FAILED = "Failed to fetch expressions: {message}"
LIST_LINE = "ID: {id}, Expression: {expression}, Status: {status}, Result: {result}"
RESULT_PLACEHOLDER = "N/A"

DETAIL_FAILED = "Failed to fetch expression: {message}"
DETAIL_MISSING_ID = "Please enter an expression ID"

# Pretty-printing of a single record in the detail region
DETAIL_INDENT = 2
