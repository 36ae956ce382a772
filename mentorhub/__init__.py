"""MentorHub: mentors, student projects, tasks and peer feedback."""

__version__ = "1.0.0"
