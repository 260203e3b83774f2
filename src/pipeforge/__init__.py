"""
PipeForge: compile visual CI/CD block graphs into pipeline configuration.

A pipeline is a small directed graph of trigger and job blocks. The compiler
turns one snapshot of that graph into GitHub Actions or GitLab CI YAML.
"""

__version__ = "0.3.0"
