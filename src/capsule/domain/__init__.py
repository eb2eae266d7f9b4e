"""Domain layer — type kinds, validators, and the token registry.

This layer depends only on the standard library. It must never import
from the container, config, or plugins packages.
"""
