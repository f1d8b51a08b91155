"""
Chat assistant

A canned-response assistant. The user's message is matched against a few
keywords and one of several fixed templates is returned. There is no
model call and no conversation state.

Branch order decides ties: bio, company, project, proposal, help, then
the default reply.
"""
import json
from typing import List, Tuple

from rfpkb.services.record_store import COLLECTIONS, RecordStore, record_to_dict
from rfpkb.utils.logging import get_logger

logger = get_logger(__name__)

CONTEXT_LIMIT = 10

COMPANIES_CONTEXT_MARKER = "Companies in your database"
PROJECTS_CONTEXT_MARKER = "Projects in your database"

# (collection, keywords that pull it into the context)
CONTEXT_TRIGGERS: List[Tuple[str, Tuple[str, ...]]] = [
    ("companies", ("company", "companies")),
    ("people", ("person", "people", "resume")),
    ("projects", ("project", "projects")),
]

BIO_TEMPLATE = """I'd be happy to help you draft a bio! Based on your request, here's a professional bio:

**Professional Bio (200 words)**

[Name] is a seasoned professional with extensive experience in [field/specialty]. With a strong background in [relevant skills/technologies], they bring valuable expertise to every project they undertake.

Their career spans [X] years in [industry], where they have consistently delivered high-quality results and demonstrated exceptional problem-solving abilities. [Name] holds a [degree/certification] from [institution] and has specialized training in [relevant areas].

Throughout their career, [Name] has successfully [key achievements or projects]. They are known for their [key strengths] and ability to [specific capabilities]. Their expertise includes [list of specialties or technologies].

[Name] is passionate about [relevant interests or goals] and is committed to [professional values or mission]. They thrive in collaborative environments and are known for their excellent communication skills and attention to detail.

When not working, [Name] enjoys [personal interests] and is actively involved in [community activities or professional organizations].

*Note: Please replace the bracketed placeholders with specific information about the person you're writing about. You can find relevant details in your knowledge base or provide them directly.*"""

COMPANY_CONTEXT_TEMPLATE = """Based on your database, here are the companies you have on record:

{context}

Would you like me to help you:
- Generate a summary of your company capabilities?
- Draft a company profile for a specific organization?
- Create a proposal section highlighting your company strengths?
- Analyze your company portfolio for RFP opportunities?"""

COMPANY_TEMPLATE = """I can help you with information about companies in your knowledge base. Here are some things I can assist with:

- **Company Profiles**: Generate detailed company profiles for RFP submissions
- **Capability Summaries**: Create summaries of your company's services and expertise
- **Project Histories**: Compile relevant project experience for proposals
- **Team Compositions**: Highlight key personnel and their qualifications

To get specific information, I'll need to access your database. Make sure you're logged in and have the proper permissions. Would you like me to help you with any of these tasks?"""

PROJECT_CONTEXT_TEMPLATE = """Here are the projects from your database:

{context}

I can help you:
- Create project summaries for proposals
- Generate case studies highlighting successful outcomes
- Match project experience to RFP requirements
- Draft project descriptions that showcase your capabilities

What specific project information would you like me to help you with?"""

PROJECT_TEMPLATE = """I can help you work with project information from your knowledge base. Here's what I can do:

- **Project Summaries**: Create compelling project descriptions for proposals
- **Case Studies**: Develop detailed case studies showcasing your success
- **Experience Matching**: Align your project history with RFP requirements
- **Value Propositions**: Highlight project outcomes and client benefits

To access your project data, make sure you're properly authenticated. What type of project information do you need help with?"""

PROPOSAL_TEMPLATE = """I can help you create compelling RFP responses! Here are some areas where I can assist:

**Proposal Writing Support:**
- **Executive Summaries**: Craft compelling overviews that grab attention
- **Company Profiles**: Develop detailed capability statements
- **Team Bios**: Create professional biographies for key personnel
- **Project Descriptions**: Write engaging case studies and project summaries
- **Technical Approaches**: Help structure technical solution descriptions

**Content Generation:**
- **Past Performance**: Compile relevant project experience
- **Qualifications**: Highlight certifications, licenses, and capabilities
- **Differentiators**: Emphasize unique strengths and competitive advantages
- **Compliance**: Ensure responses meet all RFP requirements

**What I need from you:**
- Specific RFP requirements or questions
- Target audience and project scope
- Key differentiators you want to highlight
- Any specific formatting or length requirements

What section of your proposal would you like me to help you with?"""

HELP_TEMPLATE = """I'm your AI assistant for the RFP Knowledge Base! Here's how I can help you:

**Data Management:**
- Answer questions about your companies, people, and projects
- Generate summaries and reports from your database
- Help organize and categorize your information

**Content Creation:**
- Draft professional bios and company profiles
- Create project descriptions and case studies
- Generate proposal sections and RFP responses
- Write capability statements and qualifications

**Analysis & Insights:**
- Analyze your database for RFP opportunities
- Match your capabilities to project requirements
- Identify gaps in your knowledge base
- Suggest improvements to your records

**Proposal Support:**
- Help structure RFP responses
- Generate executive summaries
- Create technical approach descriptions
- Develop past performance narratives

**Getting Started:**
- Try asking about your data: "What companies do we have?"
- Request content generation: "Draft a bio for [person name]"
- Ask for help: "Help me write a proposal section about our team"

What would you like to work on today?"""

DEFAULT_TEMPLATE = """I understand you're asking about "{message}". I'm here to help you with your RFP Knowledge Base!

Here are some ways I can assist you:

- **Generate Content**: Bios, company profiles, project descriptions
- **Answer Questions**: About your companies, people, and projects
- **Proposal Help**: RFP responses, capability statements, case studies
- **Data Analysis**: Insights from your knowledge base

Could you be more specific about what you'd like me to help you with? For example:
- "Draft a 200-word bio for [person name]"
- "What companies do we have in our database?"
- "Help me write a proposal section about our capabilities"

I'm ready to help!"""


def _mentions(text: str, *keywords: str) -> bool:
    return any(keyword in text for keyword in keywords)


def generate_reply(message: str, context: str = "") -> str:
    """Pick the canned reply for a message. The first matching branch wins."""
    lowered = message.lower()
    context = context or ""

    if _mentions(lowered, "bio", "biography"):
        return BIO_TEMPLATE

    if _mentions(lowered, "company", "companies"):
        if COMPANIES_CONTEXT_MARKER in context:
            return COMPANY_CONTEXT_TEMPLATE.format(context=context)
        return COMPANY_TEMPLATE

    if _mentions(lowered, "project", "projects"):
        if PROJECTS_CONTEXT_MARKER in context:
            return PROJECT_CONTEXT_TEMPLATE.format(context=context)
        return PROJECT_TEMPLATE

    if _mentions(lowered, "proposal", "rfp"):
        return PROPOSAL_TEMPLATE

    if _mentions(lowered, "help", "what can you do"):
        return HELP_TEMPLATE

    return DEFAULT_TEMPLATE.format(message=message)


def build_context(store: RecordStore, org_id: str, message: str, limit: int = CONTEXT_LIMIT) -> str:
    """
    Snapshot the caller's records that a message asks about.

    Each matching collection contributes "<Label> in your database:"
    followed by up to limit records as indented JSON.
    """
    lowered = message.lower()
    context = ""

    for collection, keywords in CONTEXT_TRIGGERS:
        if not _mentions(lowered, *keywords):
            continue
        records = [record_to_dict(r) for r in store.list(collection, org_id, limit=limit)]
        label = COLLECTIONS[collection].label
        context += f"{label} in your database:\n{json.dumps(records, indent=2)}\n\n"

    logger.debug(f"Built chat context of {len(context)} chars", extra={"org_id": org_id})
    return context
