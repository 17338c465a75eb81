"""Core (UI-agnostic) collection dashboard logic.

This package contains:
- source loading (CSV text -> pandas)
- per-feature field normalization
- counting / ranking of canonical keys
- chart payloads and helpers (Altair -> Vega-Lite spec dict)
- the session controller shared by the Streamlit page and the API
"""
