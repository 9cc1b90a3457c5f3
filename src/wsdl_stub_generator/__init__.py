"""Generate Rust bindings for WSDL documents."""
