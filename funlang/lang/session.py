"""Session control for the Fun interpreter: runs parsed programs against a fresh root scope and hands the result (or
the error) back to the host.
"""

import logging
import sys
from dataclasses import dataclass
from typing import Optional

from funlang.lang.error import GenericException, RecursionDepthExceeded
from funlang.lang.evaluator import Evaluator
from funlang.lang.scope import Scope

logger = logging.getLogger(__name__)


@dataclass
class Outcome:
    """Result of running a program: the value of a top-level return (None if there was none), or the error that
    aborted it.
    """
    value: Optional[int] = None
    error: Optional[GenericException] = None

    @property
    def ok(self):
        return self.error is None


class Session:
    """Governs the execution of Fun programs. Every run gets its own root scope, so nothing declared by one program is
    visible to the next.
    """
    DEFAULT_PATH = "<program>"  # used for error messages when the program has no file
    MAX_DEPTH = 2000            # default limit on nested user function calls
    FRAMES_PER_CALL = 10        # upper bound on Python frames one nested Fun call takes

    def __init__(self, error_handler=None, path=DEFAULT_PATH, stream=None, evaluator=None, max_depth=MAX_DEPTH):
        self.error_handler = error_handler
        self.path = path                                       # used for error messages
        self.stream = stream if stream is not None else sys.stdout  # println sink
        self.evaluator = evaluator if evaluator is not None else Evaluator(max_depth)
        self.max_depth = self.evaluator.max_depth

        if self.error_handler is not None:
            self.error_handler.path = path

        self.outcomes = []  # list of Outcomes of this session's runs

    def execute(self, program):
        """Runs program and returns its Outcome. Fun errors never escape this method."""
        logger.debug("%s: running program", self.path)
        recursion_limit = sys.getrecursionlimit()
        if self.max_depth is not None:
            sys.setrecursionlimit(recursion_limit + self.max_depth * Session.FRAMES_PER_CALL)
        try:
            value = self.evaluator.execute(program, Scope(self.stream))
        except GenericException as error:
            outcome = Outcome(error=error)
        except RecursionError:
            outcome = Outcome(error=RecursionDepthExceeded())
        else:
            outcome = Outcome(value=value)
        finally:
            sys.setrecursionlimit(recursion_limit)

        logger.debug("%s: finished with %s", self.path, outcome)
        self.outcomes.append(outcome)
        return outcome

    def run(self, program):
        """Like execute, but reports a failed run through this session's error handler (which may exit)."""
        outcome = self.execute(program)
        if not outcome.ok and self.error_handler is not None:
            self.error_handler.throw(outcome.error)
        return outcome

    def pop(self):
        """Removes and returns the most recent Outcome."""
        return self.outcomes.pop()
