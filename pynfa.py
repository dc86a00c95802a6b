import sys
from typing import List, Set

from pydantic import BaseModel, ConfigDict

from digraph import Digraph, FrozenDigraph, reachable

METACHARACTERS = "()|*"
WC = '.'                 # Wildcard character

DEMO_REGEXP = "(aa*b)"
DEMO_TEXT = "aaaab"


class InvalidPattern(ValueError):
    """Raised when a regular expression cannot be compiled"""


class InvalidInput(ValueError):
    """Raised when the text to match contains a metacharacter"""


class CompiledPattern(BaseModel):
    """A compiled regular expression: the pattern text and its epsilon-transition graph.

    State v < len(regexp) means "about to process regexp[v]"; state len(regexp)
    is the accept state.
    """
    model_config = ConfigDict(frozen=True)

    regexp: str
    graph: FrozenDigraph

    @property
    def accept_state(self) -> int:
        return len(self.regexp)

    def print_nfa(self):
        """Print the NFA in the format: state,symbol,epsilon targets"""
        for state in self.graph.vertices():
            symbol = "END" if state == self.accept_state else self.regexp[state]
            targets = " ".join(str(w) for w in self.graph.adjacent(state))
            print(f"{state},{symbol},{targets}")


class REcompiler:
    """Regular Expression Compiler that builds the epsilon graph of an NFA"""

    def __init__(self, regexp: str):
        """Initialize the compiler with the given regular expression pattern"""
        self.regexp = regexp
        self.m = len(regexp)     # Accept state
        self.pos = 0             # Current position in pattern

    def compile(self) -> CompiledPattern:
        """Compile the regex in a single left-to-right pass"""
        graph = Digraph(vertex_count=self.m + 1)
        ops: List[int] = []      # Positions of '(' and '|' still waiting for a ')'

        for i in range(self.m):
            self.pos = i
            lp = i

            if self.regexp[i] == '(' or self.regexp[i] == '|':
                ops.append(i)
            elif self.regexp[i] == ')':
                lp = self.close_group(graph, ops, i)

            # Closure operator, with 1-character lookahead
            if i < self.m - 1 and self.regexp[i + 1] == '*':
                graph.add_edge(lp, i + 1)
                graph.add_edge(i + 1, lp)

            if self.regexp[i] in "(*)":
                graph.add_edge(i, i + 1)

        if ops:
            self.pos = ops[-1]
            self.error("Not a proper regular expression - unmatched operator")

        return CompiledPattern(regexp=self.regexp, graph=graph.freeze())

    def close_group(self, graph: Digraph, ops: List[int], i: int) -> int:
        """Pair the ')' at i with its operators and return the group's left paren"""
        if not ops:
            self.error("Unmatched closing parenthesis")

        or_pos = ops.pop()

        if self.regexp[or_pos] == '|':
            if not ops:
                self.error("Alternation outside of a group")

            lp = ops.pop()
            if self.regexp[lp] != '(':
                # Only one '|' per group
                self.pos = lp
                self.error("Alternation needs its own group")

            graph.add_edge(lp, or_pos + 1)
            graph.add_edge(or_pos, i)
            return lp

        # Only '(' and '|' are ever pushed
        return or_pos

    def error(self, message):
        """Report a compilation error"""
        current_char = self.regexp[self.pos] if self.pos < self.m else "EOL"
        raise InvalidPattern(f"{message} - near '{current_char}' at position {self.pos}")


class REmatcher:
    """Regular Expression Matcher that simulates a compiled NFA"""

    def __init__(self, compiled: CompiledPattern):
        """Initialize the matcher with the given compiled pattern"""
        self.compiled = compiled

    def recognizes(self, text: str) -> bool:
        """Return True if the whole text is matched by the regular expression"""
        self.validate_text(text)

        regexp = self.compiled.regexp
        graph = self.compiled.graph
        end = self.compiled.accept_state

        # States reachable before consuming anything
        active = reachable(graph, [0])

        for char in text:
            match: Set[int] = set()
            for state in active:
                if state == end:
                    continue
                if regexp[state] == char or regexp[state] == WC:
                    match.add(state + 1)

            active = reachable(graph, match)

            # Every path has died
            if not active:
                return False

        return end in active

    def validate_text(self, text: str):
        """Reject text containing a metacharacter"""
        for pos, char in enumerate(text):
            if char in METACHARACTERS:
                raise InvalidInput(
                    f"text contains the metacharacter '{char}' at position {pos}"
                )


def compile_pattern(pattern: str) -> CompiledPattern:
    """Compile a pattern, raising InvalidPattern if it is malformed"""
    return REcompiler(pattern).compile()


def matches(compiled: CompiledPattern, text: str) -> bool:
    """Return True if the compiled pattern matches all of text"""
    return REmatcher(compiled).recognizes(text)


def main():
    """Main entry point for the program"""
    try:
        if len(sys.argv) > 2:
            compiled = compile_pattern("(" + sys.argv[1] + ")")
            print(matches(compiled, sys.argv[2]))
        elif len(sys.argv) == 2:
            # No text given: just print the NFA
            compile_pattern("(" + sys.argv[1] + ")").print_nfa()
        else:
            print(matches(compile_pattern(DEMO_REGEXP), DEMO_TEXT))

    except (InvalidPattern, InvalidInput) as e:
        sys.stderr.write(f"Error: {str(e)}\n")
        sys.exit(1)


if __name__ == "__main__":
    main()
