"""OrderSubmitter — guarded, single-flight order submission.

Pipeline: GUARD -> BEGIN (idle -> submitting) -> BUILD ORDER -> PERSIST
-> SUCCESS (clear cart, notify) | FAILURE (error slot, keep cart) -> IDLE

Guard failures (no user, empty cart, submission already in flight) are
silent no-ops: the result is ``ok`` with ``submitted=False`` and nothing
in state changes.

The order id is generated client-side for every attempt. Deduplicating
retried attempts is the persistence collaborator's job, not ours.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import structlog

from ordercart.domain.order import Order, build_order
from ordercart.services.base import BaseService
from ordercart.services.contracts import SubmitResultData, dump_validated
from ordercart.services.result import ServiceResult
from ordercart.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from ordercart.infrastructure.backend import Backend
    from ordercart.services.state import SessionState

log = structlog.get_logger(__name__)

TIMEOUT_MESSAGE = "Order submission timed out"


class OrderSubmitter(BaseService):
    """Turns the session cart into an order and hands it to the order sink."""

    def __init__(self, backend: Backend, state: SessionState) -> None:
        super().__init__(backend)
        self._state = state

    def _skip(self, reason: str) -> ServiceResult:
        log.debug("order.submit_skipped", reason=reason)
        return ServiceResult(
            ok=True,
            op="submit_order",
            data=dump_validated(SubmitResultData, {"submitted": False, "reason": reason}),
        )

    @traced
    async def submit(self) -> ServiceResult:
        """Submit the current cart as a pending order."""
        op = "submit_order"
        state = self._state
        cfg = self._backend.settings.orders

        # -- GUARD --
        user = self._backend.identity.current_user
        if user is None:
            return self._skip("no_user")
        if state.cart.is_empty:
            return self._skip("empty_cart")
        if not state.submission.try_begin():
            return self._skip("in_flight")

        # -- BEGIN / BUILD --
        state.set_submission_error(None)
        order = build_order(state.cart.lines(), total=state.cart.total(), user_id=user.id)
        state.notify()
        log.debug("order.submitting", order_id=str(order.id), lines=order.line_count)

        warnings: list[str] = []
        try:
            with trace_span("persist_order"):
                await self._persist(order, cfg.timeout_seconds)
        except asyncio.CancelledError:
            state.submission.finish()
            state.notify()
            raise
        except Exception as exc:
            message = self._failure_message(exc, cfg.failure_message)
            log.error(
                "order.submit_failed",
                order_id=str(order.id),
                error=message,
                exc_info=True,
            )
            state.set_submission_error(message)
            state.submission.finish()
            state.notify()
            self._dispatch_event(
                "post_order_failed",
                {"order_id": str(order.id), "user_id": user.id, "message": message},
                warnings,
            )
            return ServiceResult.failure(
                op,
                "SUBMISSION_FAILED",
                message,
                detail={"order_id": str(order.id)},
                warnings=warnings,
            )

        # -- SUCCESS --
        state.cart.clear()
        state.submission.finish()
        # publish() notifies listeners with the cleared cart and idle state.
        state.notification.publish(cfg.success_message, ttl=cfg.notification_seconds)
        log.info("order.submitted", order_id=str(order.id), total=str(order.total))
        self._dispatch_event(
            "post_order_submit",
            {
                "order_id": str(order.id),
                "user_id": user.id,
                "total": str(order.total),
                "line_count": order.line_count,
            },
            warnings,
        )

        payload: dict[str, Any] = {
            "submitted": True,
            "order": order.to_payload(),
            "notification": cfg.success_message,
        }
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(SubmitResultData, payload),
            warnings=warnings,
        )

    async def _persist(self, order: Order, timeout: float | None) -> None:
        call = self._backend.orders.submit_order(order)
        if not timeout:
            await call
            return
        deadline = asyncio.timeout(timeout)
        try:
            async with deadline:
                await call
        except TimeoutError as exc:
            # A TimeoutError raised by the sink itself keeps its own message.
            if deadline.expired():
                raise TimeoutError(TIMEOUT_MESSAGE) from exc
            raise

    @staticmethod
    def _failure_message(exc: BaseException, fallback: str) -> str:
        message = getattr(exc, "message", None) or str(exc)
        return message.strip() if isinstance(message, str) and message.strip() else fallback
