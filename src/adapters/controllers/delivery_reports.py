"""Delivery reports resource group.

Polling pattern:
1. `check_delivery_reports` returns up to 100 reports not yet confirmed; repeated
   calls return the same reports.
2. Process each report.
3. `confirm_delivery_reports_as_received` with the processed ids (up to 100)
   so they stop being returned.
"""

from __future__ import annotations

from adapters.controllers.base import BaseController, api_error
from core.domain.models import (
    CheckDeliveryReportsResponse,
    ConfirmDeliveryReportsAsReceivedRequest,
    DynamicResponse,
)


class DeliveryReportsController(BaseController):
    async def check_delivery_reports(
        self,
        account_header_value: str | None = None,
    ) -> CheckDeliveryReportsResponse:
        """Fetch delivery reports that have not been confirmed yet."""

        return await self._call(
            "GET",
            "/v1/delivery_reports",
            CheckDeliveryReportsResponse,
            account_header_value=account_header_value,
        )

    def check_delivery_reports_sync(
        self,
        account_header_value: str | None = None,
    ) -> CheckDeliveryReportsResponse:
        return self._blocking.call(self.check_delivery_reports, account_header_value)

    async def confirm_delivery_reports_as_received(
        self,
        body: ConfirmDeliveryReportsAsReceivedRequest,
        account_header_value: str | None = None,
    ) -> DynamicResponse:
        """Mark delivery reports as processed; the API answers 202 with no body semantics."""

        return await self._call(
            "POST",
            "/v1/delivery_reports/confirmed",
            None,
            account_header_value=account_header_value,
            body=body,
            status_errors={400: api_error("")},
        )

    def confirm_delivery_reports_as_received_sync(
        self,
        body: ConfirmDeliveryReportsAsReceivedRequest,
        account_header_value: str | None = None,
    ) -> DynamicResponse:
        return self._blocking.call(
            self.confirm_delivery_reports_as_received,
            body,
            account_header_value,
        )
