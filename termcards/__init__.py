"""termcards - Study flashcard sets interactively in the terminal.

Cards become quiz questions, answers are graded with typo-tolerant
matching, and running accuracy statistics are shown as you go.
"""

__version__ = "0.3.0"
__all__ = ["__version__"]
