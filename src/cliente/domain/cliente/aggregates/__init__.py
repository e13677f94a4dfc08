from cliente.domain.cliente.aggregates.cliente import Cliente

__all__ = ["Cliente"]
