import shutil
import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from ..exceptions import FileOperationError, UnhandledChoiceError
from ..models import BatchSummary, MovePlan, PromptState

# (message, choices) -> the chosen label
Prompter = Callable[[str, Sequence[str]], str]


def choices_for(action: str) -> List[str]:
    return [action, f"Don't {action}", f"{action} all (auto)"]


def console_prompt(message: str, choices: Sequence[str]) -> str:
    """
    Numbered menu on stdin/stdout. Accepts the number or the label.
    End of input declines (second choice).
    """
    print(message)
    for i, choice in enumerate(choices, 1):
        print(f"  {i}) {choice}")

    while True:
        try:
            answer = input("> ").strip()
        except EOFError:
            return choices[1]

        if answer.isdigit() and 1 <= int(answer) <= len(choices):
            return choices[int(answer) - 1]
        if answer in choices:
            return answer
        print(f"Please enter 1-{len(choices)}")


class FileMover:
    """
    Applies planned moves/renames one at a time, strictly in order.

    Each call returns the prompt state for the next one: answering
    "<action> all (auto)" switches the rest of the batch to AUTO_CONFIRM.
    The state lives only as long as one run_batch call.
    """
    def __init__(self, prompter: Optional[Prompter] = None):
        self.prompter = prompter or console_prompt

    def run_batch(self,
                  action: str,
                  plans: Sequence[MovePlan],
                  prompt: bool = True,
                  dry_run: bool = False) -> BatchSummary:
        summary = BatchSummary()
        state = PromptState.PROMPT if prompt else PromptState.AUTO_CONFIRM
        total = len(plans)

        for i, plan in enumerate(plans, 1):
            if dry_run:
                logging.info(f"[DRY RUN] {i}/{total} {action} {plan.current_path} -> {plan.target_path}")
                continue

            state, applied = self.move(action, plan.current_path, plan.target_path, state, i, total)
            if applied:
                summary.applied += 1
            else:
                summary.skipped += 1

        logging.info("---")
        logging.info(f"Finished {action.lower()}: {summary.applied} done, {summary.skipped} skipped")
        logging.info("---")
        return summary

    def move(self,
             action: str,
             current: Path,
             target: Path,
             state: PromptState,
             index: int,
             total: int) -> Tuple[PromptState, bool]:
        """
        Moves one file, asking first unless state is AUTO_CONFIRM.
        Returns (state for the next item, whether the file was moved).
        """
        current, target = Path(current), Path(target)
        choices = choices_for(action)

        if not current.exists():
            raise FileOperationError(f"Cannot {action.lower()} {current}: file does not exist")
        if target.exists():
            raise FileOperationError(f"Cannot {action.lower()} {current}: {target} already exists")

        target_dir = target.parent
        if not target_dir.exists():
            logging.info(f"Target folder does not exist, creating {target_dir}")
            try:
                target_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise FileOperationError(f"Failed to create {target_dir}: {e}") from e

        logging.info("---")
        logging.info(f"{index}/{total}")
        logging.info(f"{action} file")
        logging.info(f"| from {current}")
        logging.info(f"| to   {target}")

        if state is PromptState.AUTO_CONFIRM:
            self._rename(current, target)
            return state, True

        answer = self.prompter(f"{action} file?", choices)
        if answer == choices[0]:
            self._rename(current, target)
            return PromptState.PROMPT, True
        elif answer == choices[1]:
            logging.info(f"Skipped: not {action.lower()} {current}")
            return PromptState.PROMPT, False
        elif answer == choices[2]:
            self._rename(current, target)
            return PromptState.AUTO_CONFIRM, True

        raise UnhandledChoiceError(f"Unhandled input {answer!r} for {current}")

    def _rename(self, current: Path, target: Path):
        try:
            shutil.move(str(current), str(target))
        except OSError as e:
            raise FileOperationError(f"Failed to move {current} -> {target}: {e}") from e
