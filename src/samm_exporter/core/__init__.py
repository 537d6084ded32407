"""Core domain: registry, oscillation, sampler and encoding."""
