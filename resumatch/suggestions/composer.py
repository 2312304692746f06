"""LLM-based resume improvement suggestions grounded in matched listings."""

import json
import logging

import groq
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate

from resumatch.errors import UpstreamError
from resumatch.schemas.job import RankedMatch
from resumatch.utils import check_llm_configured, get_llm

logger = logging.getLogger(__name__)

SERVICE_NAME = "groq"

SYSTEM_PROMPT = (
    "You are a precise career coach performing resume-to-listing gap analysis. "
    "Compare a resume against job listings and give actionable, concise improvements."
)

MATCH_PROMPT = '''\
Resume:
"""
{resume_text}
"""

Top {job_count} job listings (JSON):
{jobs_json}

For each listing, provide:
1. A 1-2 sentence fit summary
2. Exactly 5 specific resume improvements (skills, keywords, quantification, structure) tailored to that listing
3. A single tailored objective/summary line to add to the resume

Format as Markdown with one heading per job listing.\
'''

NO_MATCHES_MESSAGE = "No matching job listings were found, so no tailored suggestions could be generated."


def build_match_prompt(resume_text: str, matches: list[RankedMatch]) -> str:
    """Build the user prompt for the suggestion request.

    The listings are summarized by identifier and descriptive fields
    only; similarity scores are left out. Output depends only on the
    arguments.
    """
    jobs_summary = [match.listing.summary() for match in matches]
    return MATCH_PROMPT.format(
        resume_text=resume_text,
        job_count=len(matches),
        jobs_json=json.dumps(jobs_summary, indent=2),
    )


def compose_suggestions(resume_text: str, matches: list[RankedMatch]) -> str:
    """Generate improvement suggestions for a resume using the LLM.

    Args:
        resume_text: Normalized resume text.
        matches: Retrieved listings, already limited to K.

    Returns:
        Markdown suggestion text exactly as returned by the model.

    Raises:
        ConfigurationError: If the LLM is not configured.
        UpstreamError: If the LLM call fails.
    """
    if not matches:
        logger.info("No matches to compose suggestions for")
        return NO_MATCHES_MESSAGE

    check_llm_configured()

    prompt = ChatPromptTemplate.from_messages([
        ("system", SYSTEM_PROMPT),
        ("human", "{prompt}"),
    ])
    chain = prompt | get_llm() | StrOutputParser()

    try:
        return chain.invoke({"prompt": build_match_prompt(resume_text, matches)})
    except groq.APIError as e:
        status_code = getattr(e, "status_code", None)
        logger.error(f"LLM request failed: {e}")
        raise UpstreamError(
            f"Suggestion generation failed: {e}",
            service=SERVICE_NAME,
            status_code=status_code,
        ) from e
