"""Client package for the expression calculator service.

Modules are organized into:
- config: API paths and user-facing message templates
- settings: environment/TOML backed settings
- models: typed response shapes
- errors: client error taxonomy
- services: HTTP client for the calculator API
- flows: submit / list / detail interaction flows
- session: per-browser-session display state
- ui: Streamlit panels
"""
