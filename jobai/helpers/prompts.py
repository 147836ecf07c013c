RESUME_ANALYSIS_PROMPT = """
Analyze the following resume and provide a detailed assessment in JSON format:

Resume Text:
{resume_text}

Please provide analysis in the following JSON structure:
{{
  "summary": "Brief professional summary",
  "skills": [
    {{
      "name": "skill name",
      "category": "technical|soft|language|certification|other",
      "confidence": 0.8
    }}
  ],
  "experience": [
    {{
      "title": "job title",
      "company": "company name",
      "duration": "duration",
      "description": "brief description"
    }}
  ],
  "education": [
    {{
      "degree": "degree name",
      "institution": "school name",
      "graduationDate": "date or null"
    }}
  ],
  "strengths": ["strength 1", "strength 2"],
  "weaknesses": ["weakness 1", "weakness 2"],
  "improvements": ["improvement 1", "improvement 2"],
  "feedback": ["feedback 1", "feedback 2"],
  "scores": {{
    "formatting": 85,
    "content": 90,
    "skills": 80,
    "experience": 85,
    "education": 75,
    "keywords": 70
  }},
  "atsCompatibility": {{
    "score": 85,
    "issues": ["issue 1"],
    "recommendations": ["recommendation 1"]
  }}
}}
"""

JOB_MATCH_PROMPT = """
Match the following resume with the job posting and provide a detailed analysis:

Resume Summary: {resume_summary}
Resume Skills: {resume_skills}
Resume Experience: {resume_experience}

Job Title: {job_title}
Job Description: {job_description}
Job Requirements: {job_requirements}
Job Skills: {job_skills}

Provide analysis in JSON format:
{{
  "matchScore": 85,
  "matchedSkills": ["skill1", "skill2"],
  "missingSkills": ["skill3", "skill4"],
  "relevanceReasons": [
    "Strong technical skill alignment",
    "Relevant experience level"
  ],
  "recommendations": [
    "Highlight specific project experience",
    "Emphasize leadership skills"
  ]
}}
"""

IMPROVEMENT_PROMPT = """
Provide specific improvement suggestions for this resume:

Resume Summary: {resume_summary}
Current Score: {overall_score}
{job_context}

Provide suggestions in JSON format:
{{
  "improvements": [
    "Specific improvement 1",
    "Specific improvement 2"
  ],
  "skillGaps": ["skill1", "skill2"],
  "formatSuggestions": ["format tip 1"],
  "contentSuggestions": ["content tip 1"]
}}
"""

TARGET_JOB_CONTEXT = """Target Job: {job_title} at {job_company}
Job Requirements: {job_requirements}"""

GENERAL_CONTEXT = "General career improvement"
