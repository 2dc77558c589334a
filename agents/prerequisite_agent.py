"""Prerequisite Agent - lists what to learn before starting a project."""

from agents.base_agent import BaseAgent
from agents.parsing import parse_payload
from contracts import PrerequisiteRequest, PrerequisiteSet


_RESOURCE_EXAMPLE = """            {
              "type": "YouTube|Website|Documentation|Course|Book",
              "title": "Resource title",
              "url": "https://actual-url-here.com",
              "description": "Brief description of what this resource covers",
              "duration": "10 min video|Free course|Official docs"
            }"""


def _category_example(category: str, title: str, description: str, estimated_time: str) -> str:
    return f"""    {{
      "category": "{category}",
      "items": [
        {{
          "title": "{title}",
          "description": "{description}",
          "importance": "Essential|Important|Helpful",
          "estimatedTime": "{estimated_time}",
          "resources": [
{_RESOURCE_EXAMPLE}
          ]
        }}
      ]
    }}"""


PREREQUISITE_JSON_EXAMPLE = "{\n  \"prerequisites\": [\n" + ",\n".join([
    _category_example("Core Concepts", "Concept name", "Brief explanation of what this concept is", "1-2 hours"),
    _category_example("Tools & Technologies", "Tool name", "What this tool is used for", "30 minutes"),
    _category_example("Skills & Techniques", "Skill name", "What this skill involves", "2-3 hours"),
]) + """
  ],
  "totalEstimatedTime": "5-8 hours",
  "difficultyAssessment": "Beginner-friendly|Moderate|Advanced",
  "learningPath": [
    "Start with core concepts",
    "Learn essential tools",
    "Practice basic skills",
    "Begin project implementation"
  ]
}"""


RESOURCE_REQUIREMENTS = """IMPORTANT REQUIREMENTS:
1. Include ONLY FREE resources (YouTube videos, free websites, official documentation, free courses)
2. Provide ACTUAL, WORKING URLs for each resource
3. Focus on high-quality, beginner-friendly content when possible
4. Include popular platforms like: YouTube, freeCodeCamp, MDN Web Docs, W3Schools, Khan Academy, Coursera (free courses), edX (free courses), GitHub tutorials, official documentation
5. Make sure URLs are real and accessible
6. Include a mix of video tutorials, written documentation, and interactive courses
7. Prioritize resources that are specifically relevant to the project's domain and tools"""


class PrerequisiteAgent(BaseAgent[PrerequisiteSet]):
    """Generates a PrerequisiteSet for one project."""

    def build_prompt(self, request: PrerequisiteRequest) -> str:
        tools = ", ".join(request.tools) if request.tools else "None specified"
        return (
            f'List 3-5 key prerequisites for project "{request.project_title}" '
            f"({request.domain or 'General'}, {request.skill_level or 'Beginner'} level).\n\n"
            f"Tools: {tools}\n"
            f"Description: {request.project_description}\n\n"
            f"JSON format:\n{PREREQUISITE_JSON_EXAMPLE}\n\n"
            f"{RESOURCE_REQUIREMENTS}\n\n"
            "Focus on practical, actionable prerequisites that directly relate to completing "
            "this specific project. Include estimated learning times and helpful resources "
            "for each prerequisite.\n\n"
            "IMPORTANT: Respond ONLY with valid JSON. No explanatory text before or after the JSON."
        )

    def parse(self, text: str) -> PrerequisiteSet:
        return parse_payload(text, PrerequisiteSet)
