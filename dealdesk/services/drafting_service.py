"""AI drafting collaborator.

Prompts are built here and handed to an injected text generator. No
provider ships with the package: the default generator is offline and every
request falls back to canned text. The deal service only stores a draft
when ``Draft.succeeded`` is true, so a failed call never clobbers prior
content.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from dealdesk.core.exceptions import ServiceError, ValidationError
from dealdesk.models.enums import Stage
from dealdesk.schemas.deals import Deal, Resource
from dealdesk.utils.validators import sanitize_text

logger = logging.getLogger(__name__)

TextGenerator = Callable[[str], str]

EMAIL_CONTEXTS = {
    "check-in": "Write a polite check-in email.",
    "proposal-delivery": "Write an email accompanying the attached proposal.",
    "meeting-request": "Write an email requesting a meeting to discuss next steps.",
}

FALLBACK_TEXT = {
    "proposal": "Error generating proposal. Please check your API configuration.",
    "email": "Error generating email.",
    "summary": (
        "The client is looking to modernize their infrastructure. Key drivers include "
        "scalability and security compliance. Multiple stakeholders involved."
    ),
    "digest": (
        "• Client internal review meeting scheduled.\n"
        "• Sent updated pricing deck.\n"
        "• Legal team requested NDA revision."
    ),
}


@dataclass(frozen=True)
class Draft:
    kind: str
    text: str
    succeeded: bool


def offline_generator(prompt: str) -> str:
    raise ServiceError("No drafting provider configured.")


def build_proposal_prompt(deal: Deal) -> str:
    q = deal.meddpicc
    return f"""
You are a professional B2B sales solution architect.
Create a detailed business proposal draft for the following deal.

Company: {deal.company}
Deal Title: {deal.title}
Estimated Value: ${deal.value:,.0f}

Context & Qualification (MEDDPICC):
- Metrics (Value): {q.metrics}
- Economic Buyer: {q.economic_buyer}
- Pain Points: {q.identified_pain}
- Decision Criteria: {q.decision_criteria}
- Champion: {q.champion}

Description:
{deal.description}

The proposal should include:
1. Executive Summary
2. Problem Statement (Based on Identified Pain)
3. Proposed Solution (Addressing Decision Criteria)
4. Business Value (Based on Metrics)
5. Implementation Timeline
6. Investment Summary

Format the output in Markdown. Keep it professional, concise, and persuasive.
"""


def build_email_prompt(deal: Deal, kind: str) -> str:
    if kind not in EMAIL_CONTEXTS:
        raise ValidationError(f"Unknown email kind: {kind}. Expected one of {sorted(EMAIL_CONTEXTS)}.")
    return f"""
Write a short, professional sales email to {deal.contact_name} at {deal.company}.
Context: {EMAIL_CONTEXTS[kind]}
Deal: {deal.title}
Last Contact: {deal.last_contact}

Keep it under 150 words. No subject line needed, just the body.
"""


def build_summary_prompt(deal: Deal, resources: Iterable[Resource] | None = None) -> str:
    assets = "\n".join(
        f"- {r.type} ({r.occurred_on.isoformat()}): {r.summary or ''}"
        for r in (deal.resources if resources is None else resources)
    )
    return f"""
Analyze the following deal assets and create a concise "Executive Brief" of the opportunity.
Focus on the customer's pain points, strategic goals, and why they are looking to buy now.

Deal: {deal.title} ({deal.company})
Identified Pain: {deal.meddpicc.identified_pain}

Recent Discovery Assets:
{assets}

Output a single paragraph, professional and insightful.
"""


def build_digest_prompt(deal: Deal) -> str:
    risk_line = "" if deal.stage == Stage.CLOSED else "Include 1 blocker or risk.\n"
    return f"""
Create a bulleted "Weekly Pulse" report for this deal.
Summarize 3-4 events from the last week consistent with the deal stage ({deal.stage.value}).
{risk_line}
Deal: {deal.title}
Company: {deal.company}

Format: Bullet points.
"""


class DraftingService:
    """Run prompts through a text generator with canned fallbacks."""

    def __init__(self, generator: TextGenerator | None = None, max_len: int | None = None) -> None:
        self.generator = generator or offline_generator
        self.max_len = max_len

    def _fallback(self, kind: str, reason: str, **fields: object) -> Draft:
        event = f"drafting.generate.{reason}"
        logger.warning(event, extra={"event": event, "kind": kind, **fields})
        return Draft(kind=kind, text=FALLBACK_TEXT[kind], succeeded=False)

    def _generate(self, kind: str, prompt: str) -> Draft:
        """Generated text is kept verbatim apart from NUL characters.

        Blank output, or output longer than ``max_len`` when a limit is set,
        counts as a failure rather than being trimmed.
        """
        try:
            text = sanitize_text(self.generator(prompt))
        except Exception as exc:
            return self._fallback(kind, "failed", error=str(exc))

        if not text.strip():
            return self._fallback(kind, "empty")
        if self.max_len is not None and len(text) > self.max_len:
            return self._fallback(kind, "too_long", length=len(text))
        return Draft(kind=kind, text=text, succeeded=True)

    def proposal(self, deal: Deal) -> Draft:
        return self._generate("proposal", build_proposal_prompt(deal))

    def follow_up_email(self, deal: Deal, kind: str) -> Draft:
        return self._generate("email", build_email_prompt(deal, kind))

    def executive_summary(self, deal: Deal, resources: Iterable[Resource] | None = None) -> Draft:
        return self._generate("summary", build_summary_prompt(deal, resources))

    def weekly_digest(self, deal: Deal) -> Draft:
        return self._generate("digest", build_digest_prompt(deal))
