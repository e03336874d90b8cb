"""
ANSI Color codes for console output formatting
"""

class Colors:
    """ANSI color codes and helper methods"""
    RESET = "\033[0m"
    BOLD = "\033[1m"

    # Text Colors
    GREY = "\033[90m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"

    CONCLUSION_COLORS = {
        "R1": GREEN,
        "R2": GREEN,
        "R3": YELLOW,
        "R4": YELLOW,
        "R5": RED,
    }

    @classmethod
    def colorize(cls, text: str, color: str) -> str:
        """Wrap text in color codes"""
        return f"{color}{text}{cls.RESET}"

    @classmethod
    def error(cls, text: str) -> str:
        """Format as an error (Red)"""
        return f"{cls.RED}{text}{cls.RESET}"

    @classmethod
    def warning(cls, text: str) -> str:
        """Format as a warning (Yellow)"""
        return f"{cls.YELLOW}{text}{cls.RESET}"

    @classmethod
    def get_conclusion_color(cls, conclusion_id: str) -> str:
        """Get color code based on the safety conclusion (R1 safest)"""
        return cls.CONCLUSION_COLORS.get(conclusion_id.upper(), cls.WHITE)
