"""
design_token_compiler.pipeline

Does: Token build pipeline: color normalization, reference resolution,
      per-platform transforms, format rendering and the build planner.
"""
