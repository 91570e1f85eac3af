"""
jobtailor - Job posting intake and resume tailoring

Consumes a job posting rendered as markdown by the r.jina.ai proxy and drives
an LLM to produce a tailored resume, an optional cover letter, the company and
role, and a fit score.

Architecture:
- Intake Context: Fetching the posting and classifying its lines
- Tailoring Context: Payload encoding, model invocation, reply validation
- Applications Context: Workspace scaffolding and output persistence
"""

__version__ = "0.1.0"
