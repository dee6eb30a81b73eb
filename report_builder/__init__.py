"""
custom-report-builder — Source package.

Modules:
    catalog     — Fixed metric catalog and value kinds
    selection   — Click-ordered metric selection with toggle
    generator   — Five-row synthetic sample dataset per selection
    csv_export  — CSV serialization and file export
    session     — Session context tying selection, dataset and export together
    dashboard   — Plotly chart + table preview page
    config      — config.yaml loading with defaults
    exceptions  — Error types
"""
