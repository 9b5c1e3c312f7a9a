from __future__ import annotations

from rpa_web.domain.models import AnalysisKind

INSIGHTS_PROMPT = """Analyze this research paper and provide exactly 10 key points.

RESPONSE FORMAT:
1. [Main Finding]: Brief description
   - Supporting evidence (p-value if applicable)
   - Clinical significance

2. [Main Finding]: Brief description
   - Supporting evidence
   - Clinical significance

[Continue this exact format for all 10 points]

CRITICAL RULES:
- Start IMMEDIATELY with point 1
- NO introduction or context
- NO conclusion or summary
- EXACTLY 10 points
- Each point MUST follow the format above
- Use ONLY numbers for main points (1., 2., etc.)
- Use ONLY hyphens (-) for sub-points
- Include p-values and statistics where available"""

ACHIEVEMENTS_PROMPT = """List all unique and groundbreaking aspects of this research.

RESPONSE FORMAT:
1. [Achievement Type]: Brief title
   - Detailed description
   - Scientific significance
   - Impact on field

2. [Achievement Type]: Brief title
   - Detailed description
   - Scientific significance
   - Impact on field

[Continue this format for all achievements]

CRITICAL RULES:
- Start IMMEDIATELY with achievement 1
- NO introduction or context
- NO conclusion
- Each achievement MUST follow the format above
- Use ONLY numbers for main points
- Use ONLY hyphens (-) for sub-points
- [Achievement Type] must be one of:
  * Novel Methodology
  * Groundbreaking Result
  * Technical Innovation
  * Significant Improvement"""

RESEARCH_IDEAS_PROMPT = """Identify research gaps and future directions.

RESPONSE FORMAT:

IMMEDIATE OPPORTUNITIES:
1. [Research Question]
   - Gap addressed
   - Proposed methodology
   - Expected impact

METHODOLOGICAL IMPROVEMENTS:
1. [Improvement Area]
   - Current limitation
   - Proposed solution
   - Potential benefits

LONG-TERM DIRECTIONS:
1. [Research Direction]
   - Scientific rationale
   - Required resources
   - Potential impact

CRITICAL RULES:
- Use EXACTLY these three sections
- Start IMMEDIATELY with first section
- NO introduction or context
- NO conclusion
- Each point MUST follow the format above
- Use ONLY numbers for main points
- Use ONLY hyphens (-) for sub-points
- At least 2 points per section"""

PROMPTS = {
    AnalysisKind.INSIGHTS: INSIGHTS_PROMPT,
    AnalysisKind.ACHIEVEMENTS: ACHIEVEMENTS_PROMPT,
    AnalysisKind.RESEARCH_IDEAS: RESEARCH_IDEAS_PROMPT,
}


def prompt_for(kind: AnalysisKind) -> str:
    return PROMPTS[kind]
