"""
Orchestrator Module

Coordinates the RFP response workflow: sales qualification, technical
matching, pricing and consolidation into a final bid.
"""

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, Tuple

from rfp_bid_agent.models import FinalRFPResponse
from rfp_bid_agent.pricing import PricingAgent
from rfp_bid_agent.sales_agent import SalesAgent
from rfp_bid_agent.technical_agent import TechnicalAgent

logger = logging.getLogger(__name__)

MIN_RFP_LENGTH = 100


@dataclass(frozen=True)
class WorkflowProgress:
    step: str
    status: str  # pending, in-progress, completed or error
    message: str
    data: Any = None
    execution_time: Optional[float] = None  # seconds


ProgressCallback = Callable[[WorkflowProgress], None]


class OrchestratorAgent:
    """Runs the sales, technical and pricing agents in sequence."""

    def __init__(self, sales_agent: SalesAgent, technical_agent: Optional[TechnicalAgent] = None,
                 pricing_agent: Optional[PricingAgent] = None):
        """
        Initialize the orchestrator.

        Args:
            sales_agent: Agent used to qualify the RFP text
            technical_agent: Agent used for catalog matching
            pricing_agent: Agent used for bid pricing
        """
        self.sales_agent = sales_agent
        self.technical_agent = technical_agent or TechnicalAgent()
        self.pricing_agent = pricing_agent or PricingAgent(self.technical_agent.catalog)

    def process_rfp(self, rfp_text: str,
                    on_progress: Optional[ProgressCallback] = None) -> FinalRFPResponse:
        """
        Process an RFP end-to-end.

        Args:
            rfp_text: Full RFP text
            on_progress: Optional callback receiving WorkflowProgress events

        Returns:
            FinalRFPResponse with per-stage timings in ``metrics``
        """
        def report(step: str, status: str, message: str, data: Any = None,
                   execution_time: Optional[float] = None) -> None:
            logger.info("[%s] %s: %s", step, status, message)
            if on_progress:
                on_progress(WorkflowProgress(step, status, message, data, execution_time))

        start_time = time.perf_counter()

        try:
            report("sales", "in-progress", "Sales Agent analyzing RFP document...")
            sales_start = time.perf_counter()
            qualified = self.sales_agent.qualify_rfp(rfp_text)
            summary = qualified["summary"]
            product_specs = qualified["product_specs"]
            sales_time = time.perf_counter() - sales_start
            report(
                "sales", "completed",
                f"Identified {len(summary.products)} products and "
                f"{len(summary.tests)} testing requirements",
                summary, sales_time,
            )

            report("technical", "in-progress",
                   "Technical Agent matching specifications with OEM catalog...")
            technical_start = time.perf_counter()
            technical_matches = self.technical_agent.evaluate_rfp(product_specs)
            technical_time = time.perf_counter() - technical_start
            report("technical", "completed",
                   f"Found matches for {len(technical_matches)} products",
                   technical_matches, technical_time)

            report("pricing", "in-progress", "Pricing Agent calculating costs...")
            pricing_start = time.perf_counter()
            pricing_data = self.pricing_agent.generate_pricing(technical_matches, summary.tests)
            pricing_time = time.perf_counter() - pricing_start
            report("pricing", "completed",
                   f"Total bid value: {pricing_data['totalBidValue']:,.2f}",
                   pricing_data["pricing"], pricing_time)

            report("consolidation", "in-progress", "Consolidating final RFP response...")
            total_time = time.perf_counter() - start_time
            response = FinalRFPResponse(
                rfp_summary=summary,
                technical_matches=tuple(technical_matches),
                pricing=tuple(pricing_data["pricing"]),
                total_bid_value=pricing_data["totalBidValue"],
                generated_at=datetime.now(timezone.utc).isoformat(),
                metrics={
                    "totalTime": total_time,
                    "salesAgentTime": sales_time,
                    "technicalAgentTime": technical_time,
                    "pricingAgentTime": pricing_time,
                },
            )
            report("consolidation", "completed",
                   f"RFP response generated in {total_time:.2f}s", response, total_time)
            return response

        except Exception as e:
            logger.exception("Error processing RFP")
            if on_progress:
                on_progress(WorkflowProgress("error", "error", f"Error processing RFP: {e}"))
            raise

    @staticmethod
    def validate_rfp_input(rfp_text: Optional[str]) -> Tuple[bool, List[str]]:
        """
        Validate raw RFP input before it is sent to the LLM.

        Returns:
            Tuple of (is_valid, error messages)
        """
        errors = []
        text = rfp_text or ""

        if not text.strip():
            errors.append("RFP text cannot be empty")
        if len(text) < MIN_RFP_LENGTH:
            errors.append("RFP text seems too short - please provide complete RFP document")

        return len(errors) == 0, errors
