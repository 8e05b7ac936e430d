"""
===============================================================================
ARCHIVO: crosscutting/metrics.py
===============================================================================

CRC CARD (Módulo)
-------------------------------------------------------------------------------
Nombre:
    Métricas (Prometheus) de las llamadas al SDK de S3

Responsabilidades:
    - Contar llamadas a S3 por método y resultado (ok / error).
    - Medir latencia por método.
    - Exponer helpers para generar la respuesta /metrics del host.

Colaboradores:
    - infrastructure/storage/s3_driver.py: envuelve cada llamada boto3.

Reglas:
    - Cardinalidad baja: labels = método boto3 + status. Nunca la location.
    - Registry propio: no contamina el registry global del proceso host.
===============================================================================
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Iterator

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

_registry = CollectorRegistry()

_requests_total = Counter(
    "drive_s3_requests_total",
    "Total de llamadas al SDK de S3",
    ["method", "status"],
    registry=_registry,
)

_request_latency = Histogram(
    "drive_s3_request_latency_seconds",
    "Latencia de llamadas al SDK de S3 (segundos)",
    ["method"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
    registry=_registry,
)


def record_request(method: str, status: str, seconds: float) -> None:
    """Registra una llamada ya terminada."""
    _requests_total.labels(method=method, status=status).inc()
    _request_latency.labels(method=method).observe(max(seconds, 0.0))


@contextmanager
def observe_request(method: str) -> Iterator[None]:
    """
    Uso:
      with observe_request("put_object"):
          client.put_object(...)

    Cualquier excepción cuenta como status="error" y se re-lanza.
    """
    start = time.perf_counter()
    status = "ok"
    try:
        yield
    except BaseException:
        status = "error"
        raise
    finally:
        record_request(method, status, time.perf_counter() - start)


def get_request_count(method: str, status: str) -> float:
    """Valor actual del contador (útil en tests y health checks)."""
    value = _registry.get_sample_value(
        "drive_s3_requests_total", {"method": method, "status": status}
    )
    return value or 0.0


def render_metrics() -> tuple[bytes, str]:
    """Payload de exposición + content type para el endpoint del host."""
    return generate_latest(_registry), CONTENT_TYPE_LATEST
