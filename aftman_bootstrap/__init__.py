"""Aftman bootstrap — provision the Aftman toolchain manager and the tools it manages."""

__version__ = "0.1.0"
