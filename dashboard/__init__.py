"""Core modules for the transactions dashboard."""

from . import auth, config, export, insights, normalize, schema, synth, utils, view, viz

__all__ = [
	"auth",
	"config",
	"export",
	"insights",
	"normalize",
	"schema",
	"synth",
	"utils",
	"view",
	"viz",
]
