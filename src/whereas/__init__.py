"""
Whereas: a front end and evaluator for Resolution programs.

A Resolution is a program written as legalistic English prose:

    A Resolution Concerning Greetings

    WHEREAS the Customary Greeting (hereinafter Greeting) is "Hello, World!":
    now, therefore, be it

    RESOLVED, that this assembly publish the Greeting.

PIPELINE:
---------
    source text  ->  lexer (tokens)
                 ->  parser (Resolution AST, identifier discipline)
                 ->  evaluator (runtime values, published lines)

The core performs NO console or file I/O.
Published lines are handed to a caller-supplied callback.
The command-line glue lives in whereas.cli.
"""

__version__ = "0.1.0"
