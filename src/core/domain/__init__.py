"""Domain models and errors.

The domain knows nothing about files, Gradle or the CLI: only the concepts of
build configuration.
"""
