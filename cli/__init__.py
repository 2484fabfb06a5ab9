"""
Certifica CLI Module

Command-line interface for Certifica using Typer.

Available commands:
- generate: Render and deliver a certificate PDF from a JSON record
- preview: Show the summary card for a record
- variables: List template placeholders
- template-preview: Resolve a template against sample data

Example usage:
    from cli.main import app as cli_app

    # Or use directly from command line:
    # certifica generate record.json --output-dir certificates
    # certifica template-preview my_template.txt
"""

__version__ = "0.1.0"
__all__ = [
    "main",
]
