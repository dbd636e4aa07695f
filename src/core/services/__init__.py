"""Servicios del Core: selección de retención y orquestación del borrado."""
