"""
prompts.py - User interaction prompts
ONE RESPONSIBILITY: Get confirmations from the user safely

The input source is injectable so tests and scripted runs can answer
prompts without a terminal.
"""

from ui.display import Colors


class Prompter:
    def __init__(self, input_func=None):
        self._input = input_func or input

    def _ask(self, text):
        return self._input(text)

    def yes_no(self, question, default='n'):
        """
        Ask yes/no question.

        Args:
            question: Question text
            default: Default answer ('y' or 'n')

        Returns:
            bool: True for yes, False for no
        """
        suffix = "[Y/n]" if default == 'y' else "[y/N]"

        try:
            response = self._ask(f"{question} {suffix}: ").strip().lower()

            if not response:
                return default == 'y'

            return response in ['y', 'yes']

        except (KeyboardInterrupt, EOFError):
            print()
            return False

    def exact(self, question, expected):
        """
        Ask the user to type an exact string.

        Returns:
            bool: True only if the typed text equals expected
        """
        try:
            response = self._ask(f"{question}: ").strip()
            return response == expected

        except (KeyboardInterrupt, EOFError):
            print()
            return False

    def confirm_destructive_action(self, profile_name, profile_path):
        """Danger-zone confirmation before deleting a profile."""
        print(f"\n{Colors.RED}{Colors.BOLD}{'='*60}{Colors.END}")
        print(f"{Colors.RED}{Colors.BOLD}⚠️  DANGER ZONE - PROFILE WILL BE DELETED ⚠️{Colors.END}")
        print(f"{Colors.RED}{Colors.BOLD}{'='*60}{Colors.END}\n")

        print("About to PERMANENTLY DELETE:")
        print(f"  Profile:   {Colors.BOLD}{profile_name}{Colors.END}")
        print(f"  Directory: {Colors.BOLD}{profile_path}{Colors.END}")

        print(f"\n{Colors.RED}THIS ACTION CANNOT BE UNDONE!{Colors.END}\n")

        return self.exact(f"To confirm, type the full profile name ('{profile_name}')", profile_name)


def scripted(answers):
    """Prompter that replays answers in order; EOF once they run out."""
    remaining = list(answers)

    def _next(_prompt):
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    return Prompter(_next)
