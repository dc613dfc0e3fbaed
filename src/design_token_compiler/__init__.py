"""
design_token_compiler
=====================

Does: Root package initializer for the design token compiler.
Returns: Exposes the build pipeline (`pipeline`) and token checks (`checks`)
         through a stable namespace.
Used by: The `design-tokens` CLI and any script embedding the build.
"""

__version__ = "1.0.0"

__all__: list[str] = ["__version__"]
__docformat__ = "google"
