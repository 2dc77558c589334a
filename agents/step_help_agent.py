"""Step Help Agent - answers a question about the current project step.

Output is free text; no JSON parsing and no fallback.
"""

from agents.base_agent import BaseAgent
from contracts import StepHelpRequest
from errors import ParseError


class StepHelpAgent(BaseAgent[str]):
    """Answers a learner's question in the context of one step."""

    def build_prompt(self, request: StepHelpRequest) -> str:
        project = request.project
        if request.previous_steps:
            previous = "\n".join(f"{i}. {step}" for i, step in enumerate(request.previous_steps, 1))
        else:
            previous = "None"

        return f'''You are an expert project assistant. The user is working on a project and is currently on the following step:

Project Title: {project.title}
Project Description: {project.description}
Domain: {project.domain}

Previous Steps Completed:
{previous}

Current Step ({request.current_step_index + 1}):
{request.current_step}

The user has a question about this step:
"""
{request.user_question}
"""

Give a clear, actionable, and friendly answer. If the question is about troubleshooting, provide step-by-step help. If the user is confused, break down the step and explain it simply. If the user asks for code, provide a relevant code snippet. Always keep your answer focused on the current step and the project context.'''

    def parse(self, text: str) -> str:
        answer = text.strip()
        if not answer:
            raise ParseError("Step help response was empty", raw_text=text)
        return answer
