from importlib import import_module

__all__ = ["available_exporters", "load_exporter"]

# name -> (submodule, class_name)
_EXPORTERS = {
    "cytoscape": (".cytoscape", "CytoscapeExporter"),
    "graphml": (".GraphML_adapter", "GraphMLExporter"),
    "gexf": (".GraphML_adapter", "GexfExporter"),
}


def available_exporters() -> list:
    return sorted(_EXPORTERS)


def load_exporter(name: str, *args, **kwargs):
    """Instantiate the exporter registered under ``name``."""
    if name not in _EXPORTERS:
        raise ValueError(f"Unknown exporter '{name}'")
    submod, cls = _EXPORTERS[name]
    mod = import_module(__name__ + submod)
    return getattr(mod, cls)(*args, **kwargs)
