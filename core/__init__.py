"""
Certifica Core Module

Certificate document generation for the NGO platform:
- Template variable resolution and line classification
- Page composition (borders, centred lines, rules, pinned footer)
- PDF export, file naming and delivery
- Preview summaries for on-screen confirmation

The core module is framework-agnostic and can be used independently of
the HTTP API or CLI.

Example usage:
    from core.models import CertificateData
    from core.render_certificate import generate_certificate_pdf
    from core.preview import build_preview
"""

__version__ = "0.1.0"
__all__ = [
    "models",
    "variables",
    "classify",
    "layout",
    "render_certificate",
    "preview",
]
