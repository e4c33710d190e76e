"""Core domain: farm state and the rules that change it (UI/persistence independent)."""

API_VERSION = "core-v2-20261019"
