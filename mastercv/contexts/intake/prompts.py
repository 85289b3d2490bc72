"""
Prompt templates for the AI intake calls.

Prompts ask for the persisted CV record shape (snake_case keys). Every
response is normalized through CVRecord.from_dict regardless of how closely
the model follows them.
"""

CV_SCHEMA = """\
{
  "personal_info": {
    "name": "string",
    "phone": "string",
    "email": "string",
    "linkedin": "string (URL)",
    "github": "string (URL)",
    "website": "string (URL, optional)"
  },
  "education": [
    {"institution": "string", "location": "string", "degree": "string", "dates": "string"}
  ],
  "experience": [
    {
      "role": "string",
      "company": "string",
      "location": "string",
      "dates": "string",
      "points": ["string (bullet point describing achievement/responsibility)"]
    }
  ],
  "projects": [
    {
      "name": "string",
      "technologies": "string (comma-separated tech stack)",
      "dates": "string",
      "demo_link": "string (URL, optional - deployed project or demo)",
      "points": ["string (bullet point describing the project)"]
    }
  ],
  "skills": {
    "languages": ["string"],
    "frameworks": ["string"],
    "tools": ["string"],
    "libraries": ["string"]
  }
}"""

JSON_ONLY_SYSTEM_PROMPT = """\
You are an expert resume writer. Output ONLY valid JSON matching the requested schema,
with no markdown code blocks or explanations. Use an empty string or empty array for
any field you cannot find."""

PARSE_CV_PROMPT = """\
Extract the user's professional information from the raw text below into the JSON schema.

Requirements:
1. Extract EVERY education, experience and project entry; do not skip any
2. Preserve ALL bullet points for each experience and project
3. Start bullet points with action verbs and quantify achievements where possible
4. Categorize skills into languages, frameworks, tools and libraries
5. Keep chronological order (most recent first)

OUTPUT JSON SCHEMA:
{schema}

RAW TEXT TO PARSE:
{raw_text}"""

ADD_CONTENT_PROMPT = """\
The user has an existing CV and wants to add new {content_label} to it.

Requirements:
1. Add the new content to the appropriate section(s); if the content type is 'auto',
   decide from context whether it is experience or a project
2. Insert new entries at the BEGINNING of their arrays (most recent first)
3. Keep every existing entry unchanged
4. Extract demo/live links for projects if mentioned
5. Keep exactly the same JSON structure as the existing CV

EXISTING CV JSON:
{existing_json}

NEW CONTENT TO ADD:
{new_content}

CONTENT TYPE: {content_type}"""

TAILOR_PROMPT = """\
Create a one-page resume tailored to the job description from the Master CV below.

Requirements:
1. Aim for roughly 400-450 words in total
2. Include ALL education entries
3. Select the 2-3 most relevant experience entries and 2-3 most relevant projects,
   scored by keyword overlap with the job description (prefer the more recent on ties)
4. Keep 2-3 of the most relevant bullet points per entry, using the job's keywords
   where they truthfully apply
5. Keep personal_info identical and preserve demo_link fields
6. Emphasize job-relevant skills
7. Use exactly the same JSON structure as the Master CV

The Master CV has {education_count} education, {experience_count} experience and
{project_count} project entries.

MASTER CV JSON:
{master_json}

JOB DESCRIPTION:
{job_description}"""

COVER_LETTER_SYSTEM_PROMPT = """\
You are an expert career writer. Write only the body paragraphs of a cover letter:
no name, contact details, date, salutation, or closing/signature. Separate paragraphs
with a blank line and output plain text only."""

COVER_LETTER_PROMPT = """\
Write the body of a cover letter of about {word_count} words for the position below,
drawing only on facts from the candidate's CV.

POSITION: {position}
COMPANY: {company}

JOB DESCRIPTION:
{job_description}

CANDIDATE CV JSON:
{master_json}"""
