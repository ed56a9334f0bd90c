"""Prompt templates for asking an assistant for a parseable build plan.

Each template asks for a plan in a shape one of the grammars reads reliably.
Sending the prompt is up to the caller; the parser accepts the reply whatever
shape it comes back in.

Templates are registered by id:
- json-strict: JSON only, name/hours/tasks schema (default)
- json-basic: JSON with title/completed task objects
- markdown: heading-per-phase checkbox list
- detailed: JSON with per-phase hour estimates and task notes
- web-app, mobile-app, api: JSON plans with domain-specific phase guidance

Every template carries an `example` reply, the kind of text the prompt is
expected to produce.
"""

from __future__ import annotations

from dataclasses import dataclass

from plan_ingest.errors import ConfigurationError

__all__ = [
    "DEFAULT_TEMPLATE_ID",
    "DESCRIPTION_PLACEHOLDER",
    "PLAN_PROMPT_TEMPLATE",
    "PROMPT_TEMPLATES",
    "PromptTemplate",
    "build_plan_prompt",
    "get_template",
    "list_templates",
]

DESCRIPTION_PLACEHOLDER = "<PASTE PROJECT DESCRIPTION HERE>"
PROJECT_PLACEHOLDER = "[DESCRIBE YOUR PROJECT HERE]"


@dataclass(frozen=True)
class PromptTemplate:
    """A named plan-request prompt.

    Attributes:
        id: Registry key (e.g., "json-basic")
        name: Display name
        description: One-line summary
        tags: Filter tags (e.g., "json", "markdown")
        prompt: Template text with {min_phases}/{max_phases}/{min_tasks}/{max_tasks}
            tokens and a description placeholder
        placeholder: Text replaced by the project description
        example: A reply in the shape the prompt asks for
    """

    id: str
    name: str
    description: str
    tags: tuple[str, ...]
    prompt: str
    placeholder: str = PROJECT_PLACEHOLDER
    example: str = ""


# =============================================================================
# JSON (strict schema)
# =============================================================================

PLAN_PROMPT_TEMPLATE = """You are generating a DEVELOPMENT BUILD PLAN that will be parsed by software.

Return ONLY valid JSON. No Markdown. No explanations. No code fences.

Schema:
{
  "phases": [
    {
      "name": "string",
      "hours": "X-Y",
      "tasks": ["task", "task", "task"]
    }
  ]
}

Rules:
- {min_phases}-{max_phases} phases
- {min_tasks}-{max_tasks} tasks per phase
- Tasks must be short, concrete, and implementation-focused
- Keep tasks ordered (they will be executed top-to-bottom)
- Do NOT include any fields other than: phases[].name, phases[].hours, phases[].tasks

Project description:
""" + DESCRIPTION_PLACEHOLDER

JSON_STRICT_EXAMPLE = """{
  "phases": [
    {"name": "Setup", "hours": "2-4", "tasks": ["Init repo", "Install deps", "Configure CI"]},
    {"name": "Core", "hours": "8-12", "tasks": ["Add Task model", "Build list view", "Persist to storage"]},
    {"name": "Ship", "hours": "2-3", "tasks": ["Write README", "Tag release", "Deploy"]}
  ]
}"""

# =============================================================================
# JSON (task objects)
# =============================================================================

JSON_BASIC_PROMPT = """Create a development plan in this exact JSON format:

{
  "name": "Project Name",
  "description": "Brief project description",
  "phases": [
    {
      "name": "Phase 1: Setup & Foundation",
      "tasks": [
        {"title": "Initialize project repository", "completed": false},
        {"title": "Set up development environment", "completed": false}
      ]
    },
    {
      "name": "Phase 2: Core Development",
      "tasks": [
        {"title": "Implement main features", "completed": false}
      ]
    }
  ]
}

Project to plan:
[DESCRIBE YOUR PROJECT HERE]

Requirements:
- Include {min_phases}-{max_phases} phases
- Each phase should have {min_tasks}-{max_tasks} specific, actionable tasks
- Order tasks logically (dependencies first)
- Use clear, developer-friendly language
- Return ONLY the JSON, no additional text"""

JSON_BASIC_EXAMPLE = """{
  "name": "Todo App",
  "description": "A small task tracker",
  "phases": [
    {
      "name": "Phase 1: Setup & Foundation",
      "tasks": [
        {"title": "Initialize project repository", "completed": true},
        {"title": "Set up development environment", "completed": false}
      ]
    },
    {
      "name": "Phase 2: Core Development",
      "tasks": [
        {"title": "Implement task CRUD", "completed": false},
        {"title": "Add due dates", "completed": false}
      ]
    }
  ]
}"""

# =============================================================================
# Markdown checklist
# =============================================================================

MARKDOWN_PROMPT = """Create a development plan in markdown format with checkboxes:

# Phase 1: Setup
- [ ] Task 1
- [ ] Task 2
- [ ] Task 3

# Phase 2: Development
- [ ] Task 4
- [ ] Task 5

# Phase 3: Testing & Deployment
- [ ] Task 6
- [ ] Task 7

Project to plan:
[DESCRIBE YOUR PROJECT HERE]

Include {min_phases}-{max_phases} phases with {min_tasks}-{max_tasks} specific, actionable tasks each."""

MARKDOWN_EXAMPLE = """# Phase 1: Setup (2-3 hours)
- [x] Create repository
- [ ] Configure linting

# Phase 2: Development
- [ ] Build task list screen
- [ ] Add task editing

# Phase 3: Testing & Deployment
- [ ] Write integration tests
- [ ] Deploy to staging"""

# =============================================================================
# Detailed with estimates
# =============================================================================

DETAILED_PROMPT = """Create a detailed development plan with time estimates in JSON format:

{
  "name": "Project Name",
  "description": "Project description",
  "phases": [
    {
      "name": "Phase 1: Planning",
      "hours": "4-6",
      "tasks": [
        {
          "text": "Define requirements",
          "done": false,
          "notes": "Gather and document all project requirements"
        }
      ]
    }
  ]
}

Project to plan:
[DESCRIBE YOUR PROJECT HERE]

Include:
- {min_phases}-{max_phases} phases covering full development lifecycle
- {min_tasks}-{max_tasks} tasks per phase
- Realistic time estimates in hours for each phase
- Brief notes for complex tasks
- Logical task ordering"""

DETAILED_EXAMPLE = """{
  "name": "Todo App",
  "phases": [
    {
      "name": "Phase 1: Planning",
      "hours": "4-6",
      "tasks": [
        {"text": "Define requirements", "done": true, "notes": "Interview two users"},
        {"text": "Sketch data model", "done": false}
      ]
    },
    {
      "name": "Phase 2: Build",
      "hours": "10-14",
      "tasks": [
        {"text": "Implement API", "done": false, "notes": "REST, JSON bodies"},
        {"text": "Implement UI", "done": false}
      ]
    }
  ]
}"""

# =============================================================================
# Domain templates
# =============================================================================

WEB_APP_PROMPT = """Create a development plan for a web application in JSON format:

{
  "name": "Web App Name",
  "phases": [
    {
      "name": "Phase 1: Setup & Architecture",
      "tasks": [
        {"title": "Set up project structure", "completed": false},
        {"title": "Configure build tools", "completed": false}
      ]
    },
    {"name": "Phase 2: Frontend Development", "tasks": []},
    {"name": "Phase 3: Backend & API", "tasks": []},
    {"name": "Phase 4: Database & Auth", "tasks": []},
    {"name": "Phase 5: Testing & Polish", "tasks": []},
    {"name": "Phase 6: Deployment", "tasks": []}
  ]
}

Web application to build:
[DESCRIBE YOUR WEB APP HERE]

Give every phase {min_tasks}-{max_tasks} tasks.
Focus on: UI/UX, API design, database schema, authentication, testing, and deployment."""

WEB_APP_EXAMPLE = """{
  "name": "Recipe Share",
  "phases": [
    {
      "name": "Phase 1: Setup & Architecture",
      "tasks": [
        {"title": "Set up project structure", "completed": false},
        {"title": "Configure build tools", "completed": false}
      ]
    },
    {
      "name": "Phase 2: Frontend Development",
      "tasks": [
        {"title": "Build recipe list page", "completed": false},
        {"title": "Build recipe editor", "completed": false}
      ]
    }
  ]
}"""

MOBILE_APP_PROMPT = """Create a development plan for a mobile application:

Mobile app to build:
[DESCRIBE YOUR MOBILE APP HERE]

Platform: [iOS / Android / React Native / Flutter]

Create a JSON plan shaped like {"phases": [{"name": "...", "tasks": ["..."]}]} with
{min_phases}-{max_phases} phases of {min_tasks}-{max_tasks} tasks, covering:
- UI/UX design and prototyping
- Core feature implementation
- API integration
- Local storage and caching
- Push notifications
- Testing on devices
- App store submission"""

MOBILE_APP_EXAMPLE = """Here is the plan for your habit tracker:

```json
{
  "phases": [
    {"name": "Design", "tasks": ["Wireframe main screens", "Build clickable prototype"]},
    {"name": "Build", "tasks": ["Implement habit list", "Add local storage", "Schedule reminders"]},
    {"name": "Release", "tasks": ["Test on devices", "Submit to app stores"]}
  ]
}
```

Let me know if you want more detail on any phase."""

API_PROMPT = """Create a development plan for a backend API service:

API to build:
[DESCRIBE YOUR API HERE]

Create a JSON plan shaped like {"phases": [{"name": "...", "tasks": ["..."]}]} with
{min_phases}-{max_phases} phases of {min_tasks}-{max_tasks} tasks, covering:
- API design and documentation
- Database schema design
- Authentication & authorization
- Endpoint implementation
- Rate limiting & security
- Testing & validation
- Deployment & monitoring"""

API_EXAMPLE = """{
  "phases": [
    {"name": "Design", "tasks": ["Write OpenAPI spec", "Design database schema"]},
    {"name": "Implement", "tasks": ["Add token auth", "Implement CRUD endpoints", "Add rate limiting"]},
    {"name": "Operate", "tasks": ["Write contract tests", "Deploy with monitoring"]}
  ]
}"""

# =============================================================================
# Registry
# =============================================================================

PROMPT_TEMPLATES: dict[str, PromptTemplate] = {
    t.id: t
    for t in (
        PromptTemplate(
            id="json-strict",
            name="JSON Build Plan",
            description="JSON only with name/hours/tasks per phase; parses most reliably",
            tags=("json", "structured"),
            prompt=PLAN_PROMPT_TEMPLATE,
            placeholder=DESCRIPTION_PLACEHOLDER,
            example=JSON_STRICT_EXAMPLE,
        ),
        PromptTemplate(
            id="json-basic",
            name="JSON Format",
            description="Structured JSON plan with title/completed task objects",
            tags=("json", "structured"),
            prompt=JSON_BASIC_PROMPT,
            example=JSON_BASIC_EXAMPLE,
        ),
        PromptTemplate(
            id="markdown",
            name="Markdown Checklist",
            description="Simple markdown format with checkboxes",
            tags=("markdown", "simple"),
            prompt=MARKDOWN_PROMPT,
            example=MARKDOWN_EXAMPLE,
        ),
        PromptTemplate(
            id="detailed",
            name="Detailed with Estimates",
            description="Includes time estimates and task notes",
            tags=("json", "detailed", "estimates"),
            prompt=DETAILED_PROMPT,
            example=DETAILED_EXAMPLE,
        ),
        PromptTemplate(
            id="web-app",
            name="Web Application",
            description="Template optimized for web app development",
            tags=("web", "frontend", "backend"),
            prompt=WEB_APP_PROMPT,
            placeholder="[DESCRIBE YOUR WEB APP HERE]",
            example=WEB_APP_EXAMPLE,
        ),
        PromptTemplate(
            id="mobile-app",
            name="Mobile Application",
            description="Template for iOS/Android app development",
            tags=("mobile", "ios", "android"),
            prompt=MOBILE_APP_PROMPT,
            placeholder="[DESCRIBE YOUR MOBILE APP HERE]",
            example=MOBILE_APP_EXAMPLE,
        ),
        PromptTemplate(
            id="api",
            name="API/Backend Service",
            description="For REST APIs and backend services",
            tags=("backend", "api"),
            prompt=API_PROMPT,
            placeholder="[DESCRIBE YOUR API HERE]",
            example=API_EXAMPLE,
        ),
    )
}

DEFAULT_TEMPLATE_ID = "json-strict"


def get_template(template_id: str) -> PromptTemplate:
    """Look up a template by id.

    Raises:
        ConfigurationError: If no template has that id.
    """
    try:
        return PROMPT_TEMPLATES[template_id]
    except KeyError:
        raise ConfigurationError(
            f"Unknown prompt template: {template_id!r}",
            config_key="template",
            hint=f"Available templates: {', '.join(PROMPT_TEMPLATES)}",
        ) from None


def list_templates(tag: str | None = None) -> list[PromptTemplate]:
    """Templates in registry order, optionally only those carrying `tag`."""
    if tag is None:
        return list(PROMPT_TEMPLATES.values())
    return [t for t in PROMPT_TEMPLATES.values() if tag in t.tags]


def build_plan_prompt(
    description: str = "",
    *,
    template: str = DEFAULT_TEMPLATE_ID,
    min_phases: int = 3,
    max_phases: int = 5,
    min_tasks: int = 3,
    max_tasks: int = 6,
) -> str:
    """Fill a plan prompt template.

    Args:
        description: Project description. Blank keeps the template's placeholder.
        template: Template id from PROMPT_TEMPLATES.
        min_phases: Lower bound on requested phases.
        max_phases: Upper bound on requested phases.
        min_tasks: Lower bound on requested tasks per phase.
        max_tasks: Upper bound on requested tasks per phase.

    Raises:
        ConfigurationError: If the template is unknown or a range is empty or
            not positive.
    """
    chosen = get_template(template)

    for low, high, label in ((min_phases, max_phases, "phases"), (min_tasks, max_tasks, "tasks")):
        if low < 1 or high < low:
            raise ConfigurationError(f"Invalid {label} range: {low}-{high}", config_key=label)

    # str.replace rather than str.format: the schema blocks are full of braces
    prompt = (
        chosen.prompt.replace("{min_phases}", str(min_phases))
        .replace("{max_phases}", str(max_phases))
        .replace("{min_tasks}", str(min_tasks))
        .replace("{max_tasks}", str(max_tasks))
    )
    description = description.strip()
    if description:
        prompt = prompt.replace(chosen.placeholder, description)
    return prompt
