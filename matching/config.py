"""
Configuration for skill extraction and posting matching.
Adjust the vocabulary and field mappings here.
"""

# Canonical display names detected in resume text.
# Order is the order skills are reported back to the client.
SKILL_VOCABULARY = [
    "JavaScript",
    "Python",
    "Java",
    "C++",
    "React",
    "Node.js",
    "Express",
    "MongoDB",
    "SQL",
    "Docker",
    "AWS",
    "Git",
]

# Characters removed when comparing two skill names
SKILL_SEPARATORS = r"[\s.\-]"

# Posting type -> Firestore collection
POSTING_COLLECTIONS = {
    "internship": "internships",
    "hackathon": "hackathons",
}

USERS_COLLECTION = "users"

# Synonymous posting fields, tried in order (first non-empty wins)
REQUIRED_SKILLS_FIELDS = [
    "skillsRequired",
    "requiredSkills",
    "skills",
    "domains",
    "themes",
]

DESCRIPTION_FIELDS = [
    "description",
    "Description",
    "about",
    "summary",
]

TITLE_FIELDS = [
    "title",
    "name",
]
