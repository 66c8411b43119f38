"""Course Validator - Linter for course content folders before publishing.

This package checks a course folder (manifest, markdown lessons, quiz files
and image assets) for structural and cross-reference problems, with clear
architectural boundaries:

- **models/**: Markdown node variants and naming/format predicates
- **persistence/**: Course path resolution and JSON reading
- **validation/**: Manifest, module/lesson graph, quiz, markdown and filesystem checks
- **commands/**: CLI command handlers orchestrating the pipeline
- **diagnostics**: Append-only pass/error/warning log and console report
- **errors**: Typed error hierarchy with explicit failure states
"""

__version__ = "1.0.0"
