"""Transactions API — build the tax table for a wallet and date range."""

import logging
from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, StreamingResponse

from egldtax.api.deps import get_report_service
from egldtax.api.schemas.transactions import FetchTransactionsRequest, FetchTransactionsResponse
from egldtax.api.validation import validate_fetch_request
from egldtax.report.excel_writer import TaxReportExcelWriter
from egldtax.report.service import TaxReport, TaxReportService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/fetch-transactions", tags=["transactions"])

ServiceDep = Annotated[TaxReportService, Depends(get_report_service)]

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


async def _build(body: FetchTransactionsRequest, request: Request, service: TaxReportService) -> TaxReport:
    wallet, start, end = validate_fetch_request(body)
    logger.info("Building tax report for %s from %d to %d", wallet, start, end)
    return await service.build_report(
        wallet,
        start,
        end,
        client_id=body.client_id,
        should_stop=request.is_disconnected,
    )


@router.post("")
async def fetch_transactions(body: FetchTransactionsRequest, request: Request, service: ServiceDep) -> JSONResponse:
    report = await _build(body, request, service)
    response = FetchTransactionsResponse(
        all_transactions=[tx.model_dump(mode="json", by_alias=True) for tx in report.all_transactions],
        tax_relevant_transactions=report.tax_relevant_transactions,
        warnings=report.warnings,
    )
    return JSONResponse(content=response.model_dump(mode="json", by_alias=True))


@router.post("/export")
async def export_transactions(body: FetchTransactionsRequest, request: Request, service: ServiceDep):
    """Same report as POST /fetch-transactions, as an xlsx download."""
    report = await _build(body, request, service)
    buf = TaxReportExcelWriter().write_to_buffer(report)
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d")
    filename = f"egld_tax_{body.wallet_address[-8:]}_{stamp}.xlsx"
    return StreamingResponse(
        buf,
        media_type=XLSX_CONTENT_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
