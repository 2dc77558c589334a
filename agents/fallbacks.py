"""Static fallback payloads.

Returned in place of model output when the completion call or its parsing
fails. Both tables are validated through the same contracts as live output.
"""

from typing import Any, Dict, List, Optional

from contracts import PrerequisiteSet, ProjectIdea, ProjectIdeaList


FALLBACK_PROJECTS: List[Dict[str, Any]] = [
    {
        "title": "Personal Task Tracker",
        "description": "Build a simple to-do app to manage your daily tasks with local storage.",
        "tools": ["JavaScript", "HTML", "CSS", "localStorage"],
        "timeEstimate": "2-3 hours",
        "difficulty": 2,
        "steps": [
            "Set up HTML structure with input and task list",
            "Add CSS styling for modern UI",
            "Create JavaScript functions to add/remove tasks",
            "Implement localStorage to persist tasks",
            "Add task completion toggle functionality",
        ],
        "starterCode": "// HTML: <input id='taskInput'><button onclick='addTask()'>Add</button><ul id='taskList'></ul>",
        "motivationalTip": "Start simple - even professional developers began with basic projects like this!",
    },
    {
        "title": "Random Quote Generator",
        "description": "Create a web app that displays inspiring quotes with a refresh button.",
        "tools": ["JavaScript", "Fetch API", "JSON", "CSS"],
        "timeEstimate": "1-2 hours",
        "difficulty": 1,
        "steps": [
            "Create HTML layout with quote display area",
            "Style the interface with CSS",
            "Set up array of quotes in JavaScript",
            "Add function to display random quotes",
            "Implement refresh button functionality",
        ],
        "starterCode": "const quotes = [{text: 'Stay curious!', author: 'Anonymous'}]; function showQuote() { /* your code */ }",
        "motivationalTip": "Small projects teach big lessons - focus on completing rather than perfecting!",
    },
    {
        "title": "Color Palette Generator",
        "description": "Build a tool that generates random color palettes for design inspiration.",
        "tools": ["JavaScript", "CSS", "Color Theory", "DOM Manipulation"],
        "timeEstimate": "3-4 hours",
        "difficulty": 3,
        "steps": [
            "Design HTML structure for color display grid",
            "Create CSS styles for color swatches",
            "Write function to generate random hex colors",
            "Add copy-to-clipboard functionality",
            "Implement palette export feature",
            "Add color accessibility checks",
        ],
        "starterCode": "function generateRandomColor() { return '#' + Math.floor(Math.random()*16777215).toString(16); }",
        "motivationalTip": "Every expert was once a beginner - embrace the learning process!",
    },
]


FALLBACK_PREREQUISITES: Dict[str, Any] = {
    "prerequisites": [
        {
            "category": "Core Concepts",
            "items": [
                {
                    "title": "Basic understanding of the domain",
                    "description": "Fundamental concepts and principles related to this project",
                    "importance": "Essential",
                    "estimatedTime": "2-3 hours",
                    "resources": [
                        {
                            "type": "YouTube",
                            "title": "Introduction to Programming Concepts",
                            "url": "https://www.youtube.com/watch?v=zOjov-2OZ0E",
                            "description": "FreeCodeCamp's comprehensive introduction to programming",
                            "duration": "4 hour course",
                        },
                        {
                            "type": "Website",
                            "title": "MDN Web Docs - Getting Started",
                            "url": "https://developer.mozilla.org/en-US/docs/Learn",
                            "description": "Mozilla's free web development learning resources",
                            "duration": "Free tutorials",
                        },
                    ],
                }
            ],
        },
        {
            "category": "Tools & Technologies",
            "items": [
                {
                    "title": "Development environment setup",
                    "description": "Setting up the necessary tools and software",
                    "importance": "Essential",
                    "estimatedTime": "30-60 minutes",
                    "resources": [
                        {
                            "type": "YouTube",
                            "title": "How to Set Up Your Development Environment",
                            "url": "https://www.youtube.com/watch?v=0fKg7e37bQE",
                            "description": "Step-by-step guide to setting up your coding environment",
                            "duration": "15 min video",
                        },
                        {
                            "type": "Website",
                            "title": "VS Code Setup Guide",
                            "url": "https://code.visualstudio.com/learn",
                            "description": "Official VS Code documentation and tutorials",
                            "duration": "Free documentation",
                        },
                    ],
                }
            ],
        },
    ],
    "totalEstimatedTime": "3-4 hours",
    "difficultyAssessment": "Beginner-friendly",
    "learningPath": [
        "Review core concepts",
        "Set up development environment",
        "Practice basic techniques",
        "Start project implementation",
    ],
}


def fallback_projects(num_ideas: Optional[int] = None) -> List[ProjectIdea]:
    """The fallback project table, cut to `num_ideas` when that is smaller."""
    projects = ProjectIdeaList.validate_python(FALLBACK_PROJECTS)
    if num_ideas is not None:
        projects = projects[:num_ideas]
    return projects


def fallback_prerequisites() -> PrerequisiteSet:
    return PrerequisiteSet.model_validate(FALLBACK_PREREQUISITES)
