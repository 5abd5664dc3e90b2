"""All prompt templates for the hosted model calls."""

from dataclasses import dataclass

from models.requests import CoverLetterRequest, EvaluateAnswerRequest, InterviewQuestionsRequest
from models.responses import KeywordAnalysis
from services.section_parser import ResumeProfile

DEFAULT_HIRING_MANAGER = "Hiring Manager"
DEFAULT_TONE = "professional"

# Extra guidance per interview type for question generation
INTERVIEW_TYPE_HINTS: dict[str, str] = {
    "Technical": "Test technical depth on the tools and concepts in the resume.",
    "Behavioral": "Ask for past situations answerable in STAR format.",
    "Hospitality Management": "Focus on hotel operations and guest service.",
    "Customer Service": "Focus on handling customers, complaints and service recovery.",
}


@dataclass(frozen=True)
class Prompt:
    system: str
    user: str
    temperature: float = 0.3
    max_tokens: int = 2000
    json_output: bool = True


def build_resume_classifier_prompt(resume_text: str) -> Prompt:
    return Prompt(
        system=(
            "You are a document classifier. Determine if the provided text is a "
            "resume/CV. Respond with ONLY 'YES' or 'NO'."
        ),
        user=(
            "Is this a resume or CV? Look for typical resume elements like work "
            "experience, education, skills, contact information.\n\n"
            f"Document text:\n{resume_text[:1500]}"
        ),
        temperature=0.1,
        max_tokens=10,
        json_output=False,
    )


def build_resume_scoring_prompt(resume_text: str) -> Prompt:
    item = '{{"label": "{}", "present": <true|false>, "message": "<specific feedback>"}}'

    def section(labels: list[str]) -> str:
        items = ",\n      ".join(item.format(label) for label in labels)
        return f'{{\n    "status": "<good|warning|poor>",\n    "items": [\n      {items}\n    ]\n  }}'

    contact_info = section(["Email", "Phone", "LinkedIn", "Location"])
    structure = section(
        ["Clear sections", "Consistent formatting", "Appropriate length", "Professional appearance"]
    )
    content = section(
        ["Action verbs", "Quantifiable achievements", "Relevant experience", "Skills section"]
    )
    ats = section(["Standard sections", "Simple formatting", "No images/graphics", "Keywords present"])

    return Prompt(
        system=(
            "You are an expert resume analyzer. Analyze resumes and return ONLY valid "
            "JSON with scores and suggestions. No markdown, no extra text."
        ),
        user=f"""Analyze the following resume carefully and provide detailed, accurate feedback.

RESUME TEXT:
{resume_text}

INSTRUCTIONS:
1. Read the entire resume carefully
2. Check for email addresses (look for @ symbol)
3. Check for phone numbers (digits with dashes, parentheses, or spaces)
4. Check for LinkedIn URLs or profiles
5. Check for location/address information
6. Evaluate structure, formatting, content quality, and ATS compatibility
7. Give specific, actionable suggestions based on what you actually see

SCORING GUIDELINES:
- Overall Score (0-100): weighted average of all metrics
- ATS Score (0-100): how well it passes Applicant Tracking Systems
- Formatting Score (0-100): structure, consistency, readability
- Content Score (0-100): quality of achievements, experience, skills
- Keyword Score (0-100): presence of relevant industry keywords

STATUS VALUES: "good" (80+), "warning" (60-79), or "poor" (<60)

Return ONLY valid JSON in this exact structure (no markdown, no code blocks):
{{
  "overallScore": <integer 0-100>,
  "atsScore": <integer 0-100>,
  "formattingScore": <integer 0-100>,
  "contentScore": <integer 0-100>,
  "keywordScore": <integer 0-100>,
  "contactInfo": {contact_info},
  "structure": {structure},
  "content": {content},
  "atsCompatibility": {ats},
  "quickWins": ["<actionable suggestion>", "<actionable suggestion>", "<actionable suggestion>"],
  "suggestions": ["<detailed suggestion>", "<detailed suggestion>", "<detailed suggestion>", "<detailed suggestion>", "<detailed suggestion>"]
}}""",
        temperature=0.3,
        max_tokens=2000,
    )


def build_suggestions_prompt(resume_text: str) -> Prompt:
    return Prompt(
        system=(
            "You are a career advisor. Analyze resumes and suggest suitable job "
            "positions. Return ONLY valid JSON."
        ),
        user=f"""Analyze this resume and suggest the 3 most suitable job positions based on skills and experience.

Resume:
{resume_text}

Extract contact information and suggest positions. Return ONLY valid JSON:
{{
  "suggestedPositions": ["Position 1", "Position 2", "Position 3"],
  "candidateLevel": "Internship|Junior|Mid-Level|Senior",
  "primarySkills": ["skill1", "skill2", "skill3"],
  "yearsOfExperience": 0,
  "contactInfo": {{
    "name": "Full Name",
    "email": "email@example.com or empty string",
    "phone": "phone number or empty string",
    "linkedin": "linkedin url or empty string",
    "location": "location or empty string"
  }}
}}""",
        temperature=0.3,
        max_tokens=1000,
    )


def build_cover_letter_prompt(request: CoverLetterRequest, letter_date: str) -> Prompt:
    hiring_manager = request.hiring_manager or DEFAULT_HIRING_MANAGER
    company = request.company_name or "the company"
    tone = request.tone or DEFAULT_TONE
    job_section = f"JOB DESCRIPTION:\n{request.job_description}\n" if request.job_description else ""

    return Prompt(
        system=(
            "You are a professional cover letter writer. Generate compelling, "
            "personalized cover letters. Return ONLY valid JSON with properly escaped strings."
        ),
        user=f"""Generate a professional cover letter.

RESUME:
{request.resume_text}

POSITION: {request.position}
COMPANY: {company}
HIRING MANAGER: {hiring_manager}
{job_section}TONE: {tone}

INSTRUCTIONS:
1. Write 3-4 paragraphs (300-400 words)
2. Start with "Dear {hiring_manager}," (use this exact name)
3. Match the candidate's experience to the job requirements
4. Highlight relevant skills from the resume
5. Show enthusiasm for the role at {company}
6. Use a {tone} tone
7. Structure: Opening, Body (2-3 paragraphs), Closing
8. In the coverLetter field, use \\n\\n to separate paragraphs

Return ONLY valid JSON with this structure:
{{
  "coverLetter": "Dear {hiring_manager},\\n\\nFirst paragraph.\\n\\nSecond paragraph.\\n\\nThird paragraph.\\n\\nSincerely,\\n[Candidate Name]",
  "contactInfo": {{
    "name": "Full Name from resume",
    "email": "email or empty string",
    "phone": "phone or empty string",
    "linkedin": "linkedin.com/in/username or empty string",
    "location": "City, State or empty string"
  }},
  "date": "{letter_date}",
  "companyName": "{request.company_name or 'Hiring Company'}",
  "position": "{request.position}",
  "hiringManager": "{hiring_manager}"
}}""",
        temperature=0.5,
        max_tokens=2500,
    )


def build_interview_types_prompt(resume_text: str, job_description: str | None = None) -> Prompt:
    job_section = f"\nJob: {job_description[:500]}" if job_description else ""
    return Prompt(
        system="Analyze the candidate's professional field and suggest interview types. Return JSON only.",
        user=f"""Resume: {resume_text[:2000]}{job_section}

First identify the candidate's field (tech, hospitality, healthcare, finance, ...),
then suggest 2-3 interview types appropriate for THAT field. Do NOT suggest
coding or technical interviews for non-technical fields.
Examples:
Hotel/hospitality -> "Hospitality Management", "Customer Service"
Tech -> "Technical", "System Design"
Healthcare -> "Clinical", "Patient Care"

Return ONLY valid JSON:
{{"availableTypes":[{{"type":"X","description":"Y","relevance":"High|Medium","skillsToTest":["A","B"]}}],"recommendedType":"X","candidateLevel":"Entry|Mid|Senior","primarySkills":["A","B","C"]}}""",
        temperature=0.2,
        max_tokens=1500,
    )


def build_relevance_prompt(resume_text: str, job_description: str) -> Prompt:
    return Prompt(
        system="Check if the resume matches the job. Respond with ONLY 'MATCH' or 'MISMATCH - reason'.",
        user=f"""Resume: {resume_text[:2000]}
Job: {job_description[:1000]}

If the candidate's background is at least 30% relevant to the job, say MATCH.
Otherwise say MISMATCH - followed by a one-sentence reason.""",
        temperature=0.2,
        max_tokens=80,
        json_output=False,
    )


def build_interview_questions_prompt(request: InterviewQuestionsRequest) -> Prompt:
    interview_type = request.interview_type or "mixed"
    category = request.interview_type or "Mixed"
    job_section = f"\nJob: {request.job_description[:500]}" if request.job_description else ""
    hint = INTERVIEW_TYPE_HINTS.get(request.interview_type or "", "")

    return Prompt(
        system=f"Generate 5 {interview_type} interview questions. Return JSON only.",
        user=f"""Resume: {request.resume_text[:2000]}{job_section}

Generate 5 {interview_type} interview questions based on the ACTUAL skills and
experience in the resume. Ask deep, fundamental questions. {hint}

Return ONLY valid JSON:
{{"questions":[{{"question":"...","category":"{category}","difficulty":"Easy|Medium|Hard"}}]}}""",
        temperature=0.7,
        max_tokens=2000,
    )


def build_answer_feedback_prompt(request: EvaluateAnswerRequest) -> Prompt:
    return Prompt(
        system="You are an interview coach. Provide brief feedback. Return JSON only.",
        user=f"""Q: {request.question}
A: {request.answer}
Candidate background: {request.resume_text[:1000]}

Give 2-3 sentences of constructive feedback on this answer. No score.

Return ONLY valid JSON: {{"feedback":"..."}}""",
        temperature=0.6,
        max_tokens=300,
    )


def build_ats_prompt(
    resume_text: str,
    job_description: str | None,
    profile: ResumeProfile,
    local_keywords: KeywordAnalysis | None = None,
) -> Prompt:
    """ATS compatibility check.

    The local section/contact/keyword findings are passed as calibration
    context, not as final answers.
    """
    contact = ", ".join(k for k, v in profile.contact.items() if v) or "none detected"
    context = f"""LOCAL PRE-ANALYSIS (calibration reference, verify against the resume):
- Sections detected: {', '.join(profile.sections) or 'none'}
- Standard sections missing: {', '.join(profile.missing_standard_sections) or 'none'}
- Contact details found: {contact}
- Word count: {profile.word_count}
"""
    if local_keywords is not None:
        context += f"""- JD keywords found in resume: {', '.join(local_keywords.matched_keywords) or 'none'}
- JD keywords missing: {', '.join(local_keywords.missing_keywords) or 'none'}
"""

    if job_description:
        job_section = f"\nJOB DESCRIPTION:\n---\n{job_description}\n---\n"
        keyword_shape = """{
    "matchedKeywords": [<important JD keywords present in the resume>],
    "missingKeywords": [<important JD keywords absent from the resume>],
    "matchRate": <integer 0-100>
  }"""
    else:
        job_section = ""
        keyword_shape = "null"

    return Prompt(
        system=(
            "You are an Applicant Tracking System (ATS) expert. Evaluate how reliably "
            "automated screening software can parse a resume. Return ONLY valid JSON."
        ),
        user=f"""Check this resume for ATS compatibility.

SCORING RUBRIC:
- 80-100: parses cleanly, standard headers, keywords present
- 60-79: minor issues (inconsistent dates, weak keyword coverage)
- 40-59: several issues that may drop information
- 0-39: likely rejected or garbled by ATS parsers

Critical issues block parsing (missing contact details, tables/columns,
non-standard headers). Warnings reduce ranking but still parse.

{context}
RESUME:
---
{resume_text}
---
{job_section}
Return ONLY valid JSON (no markdown) in this exact structure:
{{
  "score": <integer 0-100>,
  "criticalIssues": [{{"issue": "<problem>", "fix": "<how to fix it>"}}],
  "warnings": [{{"issue": "<problem>", "fix": "<how to fix it>"}}],
  "passed": ["<check the resume passes>"],
  "keywordAnalysis": {keyword_shape}
}}""",
        temperature=0.2,
        max_tokens=2500,
    )
