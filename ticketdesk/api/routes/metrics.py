from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from ticketdesk.dependencies.tickets import TicketServiceDep
from ticketdesk.metrics import PrometheusExporter
from ticketdesk.metrics.exporters import PROMETHEUS_CONTENT_TYPE

router = APIRouter(prefix="/metrics", tags=["observability"])


@router.get("", response_class=PlainTextResponse, summary="Prometheus metrics")
async def metrics(service: TicketServiceDep) -> PlainTextResponse:
    payload = PrometheusExporter(service.metrics).export()
    return PlainTextResponse(payload, media_type=PROMETHEUS_CONTENT_TYPE)
