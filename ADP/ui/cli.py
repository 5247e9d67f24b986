#!/usr/bin/env python
#
# cli.py - CLI handling for the Additional Disk Provisioner
#
# October 2026
# Copyright (c) 2026 the ADP project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Additional Disk Provisioner (ADP) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of ADP, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.
#
# PYTHON_ARGCOMPLETE_OK

"""Command-line front end of the ``adp`` program.

**Classes**

.. autosummary::
  :nosignatures:

  CLI
  CLILoggingFormatter
"""

import argparse
import logging
import os
import re
import sys
import textwrap
from shutil import get_terminal_size

from colorlog import ColoredFormatter

from ADP import __version_long__
from ADP.data_validation import InvalidInputError
from ADP.commands import command_classes
from .ui import UI

logger = logging.getLogger(__name__)

VERBOSITY_LEVELS = [
    logging.CRITICAL, logging.ERROR, logging.WARNING,
    logging.NOTICE,
    logging.INFO, logging.VERBOSE,
    logging.DEBUG, logging.SPAM,
]
"""Log levels from quietest to noisiest; ``-q``/``-v`` step through these."""

DEFAULT_VERBOSITY = logging.NOTICE

# One unit of a usage string that must not be split when wrapping
_USAGE_GROUP_RE = re.compile(r"""
  \(.*?\)+   |  # (nested) parenthesized alternatives
  \[.*?\]+   |  # [optional] arguments
  -\S+\s+\S+ |  # --option METAVAR
  \S+           # POSITIONAL
""", re.VERBOSE)

# Namespace entries used by the CLI itself rather than by a command
_GLOBAL_ARGS = ("_verbosity", "_quietude", "_force", "_subcommand")


class CLI(UI):
    """Interactive terminal interface: argument parsing, prompts and logging.

    .. autosummary::
      :nosignatures:

      adjust_verbosity
      confirm
      create_parser
      create_subparsers
      fill_usage
      main
      parse_args
      run
      set_verbosity
      terminal_width
    """

    def __init__(self, terminal_width=None):
        """Build the parser for every registered command.

        Args:
          terminal_width (int): Wrap output to this many columns instead
              of the width of the actual terminal.
        """
        super(CLI, self).__init__(force=True)
        self.input = input
        self.handler = None
        self.master_logger = None
        self._terminal_width = terminal_width
        self.wrapper = textwrap.TextWrapper(width=self.terminal_width - 1)

        self.create_parser()
        self.create_subparsers()
        try:
            import argcomplete
        except ImportError:
            pass
        else:
            argcomplete.autocomplete(self.parser)

    @property
    def terminal_width(self):
        """Columns available for output (80 if unknown)."""
        if self._terminal_width is None:
            try:
                self._terminal_width = get_terminal_size().columns
            except ValueError:
                self._terminal_width = 0
            if self._terminal_width <= 0:
                self._terminal_width = 80
        return self._terminal_width

    def fill_usage(self, subcommand, usage_list):
        """Lay out the usage lines of ``adp <subcommand>``.

        A ``--help`` line comes first. Each usage string is then wrapped
        to :attr:`terminal_width` without splitting any bracketed group or
        option from its metavar.

        Args:
          subcommand (str): Subcommand name.
          usage_list (list): Usage strings, minus the ``adp <opts> cmd``
            prefix.
        Returns:
          string: The wrapped usage text.

        Examples:
          ::

            >>> print(CLI(50).fill_usage('attach-disk',
            ...       ["[VMX] [-o OUTPUT] [--home HOME]"]))
            <BLANKLINE>
              adp attach-disk --help
              adp <opts> attach-disk [VMX] [-o OUTPUT]
                                     [--home HOME]
        """
        lines = ["\n  adp {0} --help".format(subcommand)]
        prefix = "  adp <opts> {0}".format(subcommand)
        width = self.terminal_width
        for usage in usage_list:
            groups = _USAGE_GROUP_RE.findall(usage)
            # Hang continuation lines under the subcommand if they fit there
            if len(prefix) + max(len(g) for g in groups) >= width:
                indent = "     "
            else:
                indent = " " * len(prefix)
            line = prefix
            for group in groups:
                if len(line) + len(group) >= width:
                    lines.append(line)
                    line = indent
                line += " " + group
            lines.append(line)
        return "\n".join(lines)

    def adjust_verbosity(self, delta):
        """Step the log level away from the default.

        Args:
          delta (int): Steps along :data:`VERBOSITY_LEVELS`; positive is
            noisier, negative is quieter. Clamped at either end.
        """
        index = VERBOSITY_LEVELS.index(DEFAULT_VERBOSITY) + delta
        index = max(0, min(index, len(VERBOSITY_LEVELS) - 1))
        self.set_verbosity(VERBOSITY_LEVELS[index])

    def set_verbosity(self, level):
        """Send ``ADP`` logs to stderr at the given level.

        The first call attaches a handler using :class:`CLILoggingFormatter`;
        later calls just change its level and format.

        Args:
          level (int): Logging level as defined in :mod:`logging`.
        """
        if not self.handler:
            self.handler = logging.StreamHandler()
        self.handler.setLevel(level)
        self.handler.setFormatter(CLILoggingFormatter(level))
        if not self.master_logger:
            self.master_logger = logging.getLogger('ADP')
            self.master_logger.addHandler(self.handler)
        self.master_logger.setLevel(level)
        logger.debug("Verbosity level is now %s",
                     logging.getLevelName(level))

    def run(self, argv):
        """Parse ``argv`` (without the program name) and run :meth:`main`.

        Returns:
          int: Return code from :meth:`main`
        """
        return self.main(self.parse_args(argv))

    def _wrap(self, text):
        """Wrap each line of ``text`` to the terminal width."""
        self.wrapper.width = self.terminal_width - 1
        self.wrapper.initial_indent = ''
        self.wrapper.subsequent_indent = ''
        self.wrapper.break_on_hyphens = False
        wrapped = []
        for line in text.splitlines():
            wrapped.extend(self.wrapper.wrap(line))
        return "\n".join(wrapped)

    def confirm(self, prompt):
        """Ask a yes/no question, defaulting to yes.

        With :attr:`force` set, the question is logged and answered yes
        without waiting for input.

        Args:
          prompt (str): Question to ask.
        Returns:
          bool: The user's answer.
        """
        if self.force:
            logger.warning("Automatically agreeing to '%s'", prompt)
            return True

        prompt = self._wrap(prompt)
        while True:
            ans = self.input("{0} [y] ".format(prompt)).strip()
            if ans in ('', 'y', 'Y'):
                return True
            if ans in ('n', 'N'):
                return False
            print("Please enter 'y' or 'n'")

    def create_parser(self):
        """Build :attr:`parser` with the options common to all commands."""
        # argparse wraps its help text to $COLUMNS
        os.environ['COLUMNS'] = str(self.terminal_width)
        parser = argparse.ArgumentParser(
            prog="adp",
            usage="""
  adp --help
  adp --version
  adp <command> --help
  adp <options> <command> <command-options>""",
            description=(__version_long__ + "\n" + self._wrap(
                "A tool for keeping a persistent data disk attached to a "
                "VMware development VM across rebuilds, and for checking "
                "the resulting host against its compliance baseline.")),
            formatter_class=argparse.RawDescriptionHelpFormatter)

        parser.add_argument('-V', '--version', action='version',
                            version=__version_long__)
        parser.add_argument('-f', '--force', dest='_force',
                            action='store_true',
                            help="""Answer yes to every confirmation """
                            """prompt""")

        noise = parser.add_mutually_exclusive_group()
        noise.add_argument(
            '-q', '--quiet', dest='_quietude', action='count', default=0,
            help="Log less (repeatable)")
        noise.add_argument(
            '-v', '--verbose', dest='_verbosity', action='count', default=0,
            help="Log more (repeatable)")

        self.parser = parser
        self.subparsers = parser.add_subparsers(prog="adp",
                                                dest='_subcommand',
                                                metavar="<command>",
                                                title="commands")
        self.subparser_lookup = {}

    def create_subparsers(self):
        """Add the subparser of every registered command class.

        The classes are listed in :data:`ADP.commands.command_classes`.
        Each parser keeps its command instance as the ``instance`` default.
        """
        for klass in command_classes:
            klass(self).create_subparser()

    def add_subparser(self, title, parent=None, aliases=None, **kwargs):
        """Add a subcommand parser and remember it by name and alias.

        Args:
          title (str): Subcommand name.
          parent (object): Result of :meth:`ArgumentParser.add_subparsers`
              to add to (default: the top-level ``adp`` commands).
          aliases (list): Other names for the subcommand.
          kwargs (dict): Passed through to :meth:`parent.add_parser`

        Returns:
          object: The new parser.
        """
        if aliases:
            kwargs['aliases'] = aliases
        if parent is None:
            parent = self.subparsers

        parser = parent.add_parser(title, **kwargs)
        for name in [title] + list(aliases or []):
            self.subparser_lookup[name] = parser
        return parser

    def parse_args(self, argv):
        """Parse ``argv`` (without the program name).

        Without a terminal on both stdin and stdout nobody can answer a
        prompt, so ``--force`` is implied.

        Returns:
          argparse.Namespace: Parsed arguments.
        """
        args = self.parser.parse_args(argv)
        if not (sys.stdin.isatty() and sys.stdout.isatty()):
            args._force = True  # pylint: disable=protected-access
        return args

    @staticmethod
    def args_to_dict(args):
        """Parsed arguments meant for the command, as a dict.

        Args:
          args (argparse.Namespace): Namespace from :meth:`parse_args`.
        Returns:
          dict: Argument name to value, without the CLI's own options.
        """
        return dict((key, value) for key, value in vars(args).items()
                    if key not in _GLOBAL_ARGS)

    @staticmethod
    def set_instance_attributes(arg_dict):
        """Copy argument values onto ``arg_dict["instance"]``.

        Positional arguments (upper-case names, such as ``PACKAGE``) are
        set first, under their lower-case names, so options that depend
        on them see them. Arguments left at ``None`` are skipped.

        Args:
          arg_dict (dict): From :meth:`args_to_dict`.
        Raises:
          InvalidInputError: if the command rejects a value.
        """
        instance = arg_dict["instance"]
        items = [(arg, value) for arg, value in arg_dict.items()
                 if arg != "instance" and value is not None]
        for arg, value in items:
            if arg[0].isupper():
                setattr(instance, arg.lower(), value)
        for arg, value in items:
            if not arg[0].isupper():
                setattr(instance, arg, value)

    @staticmethod
    def _exit_for(exc):
        """Report an :class:`EnvironmentError` and exit with its errno."""
        if exc.errno is None:
            print(exc.args[0])
            sys.exit(1)
        if exc.filename is not None:
            print("{0}: {1}".format(exc.filename, exc.strerror))
        else:
            print(exc.strerror or exc)
        sys.exit(exc.errno)

    def main(self, args):
        """Run the subcommand selected by ``args``.

        Sets verbosity from ``-v``/``-q``, hands the arguments to the
        command and calls its :meth:`~ADP.commands.Command.run` and
        :meth:`~ADP.commands.Command.finished`. Whatever happens, the
        command is then destroyed and the log handler removed.

        Args:
          args (argparse.Namespace): From :meth:`parse_args`.

        Returns:
          int: ``0`` on success. Failures exit instead:

           * 1 on runtime error, including failed compliance checks
           * 2 on input error (parser error,
             :class:`~ADP.data_validation.InvalidInputError`, etc.)
           * the ``errno`` of any other :class:`EnvironmentError`
        """
        # pylint: disable=protected-access
        self.force = args._force
        self.adjust_verbosity(args._verbosity - args._quietude)

        if not args._subcommand:
            self.parser.error("too few arguments")
        subparser = self.subparser_lookup[args._subcommand]

        try:
            self.set_instance_attributes(self.args_to_dict(args))
            args.instance.run()
            args.instance.finished()
        except InvalidInputError as exc:
            subparser.error(exc)
        except NotImplementedError as exc:
            sys.exit("Missing functionality:\n{0}\n"
                     "Please contact the ADP development team."
                     .format(exc.args[0]))
        except EnvironmentError as exc:
            self._exit_for(exc)
        except RuntimeError as exc:
            print(exc)
            sys.exit(1)
        except (KeyboardInterrupt, EOFError):
            sys.exit("\nAborted by user.")
        finally:
            args.instance.destroy()
            if self.master_logger:
                self.master_logger.removeHandler(self.handler)
                self.master_logger = None
                self.handler.close()
                self.handler = None
        return 0


class CLILoggingFormatter(ColoredFormatter, object):
    r"""Colored log formatter that shows more detail at noisier levels.

    At the default level only the level name and message are shown. INFO
    adds the module name, VERBOSE the function name, and DEBUG a
    timestamp and line number.

    .. seealso:: :class:`logging.Formatter`

    Args:
      verbosity (int): Logging level as defined by :mod:`logging`.

    Examples::

      >>> record = logging.LogRecord("ADP.doctests", logging.INFO,
      ...                            "/fakemodule.py", 22, "Hello world!",
      ...                            None, None, "test_func")
      >>> record.created = 0
      >>> record.msecs = 0
      >>> CLILoggingFormatter(logging.NOTICE).format(record)
      '\x1b[32mINFO    :\x1b[0m Hello world!'
      >>> CLILoggingFormatter(logging.INFO).format(record) # doctest:+ELLIPSIS
      '\x1b[32mINFO    : fakemodule ... Hello world!'
      >>> CLILoggingFormatter(logging.VERBOSE).format(
      ... record) # doctest:+ELLIPSIS
      '\x1b[32mINFO    : fakemodule ... test_func()... Hello world!'
    """

    LOG_COLORS = {
        'SPAM':     '',
        'DEBUG':    'blue',
        'VERBOSE':  'cyan',
        'INFO':     'green',
        'NOTICE':   'yellow',
        'WARNING':  'red',
        'ERROR':    'fg_white,bg_red',
        'CRITICAL': 'purple,bold',
    }

    def __init__(self, verbosity=logging.INFO):
        """Pick the fields to show for ``verbosity``."""
        fields = ["%(levelname)-7s"]
        datefmt = None
        if verbosity <= logging.DEBUG:
            fields.append("%(asctime)s.%(msecs)d")
            datefmt = "%H:%M:%S"
        if verbosity <= logging.INFO:
            # wide enough for "data_validation"
            fields.append("%(module)-15s")
        if verbosity <= logging.DEBUG:
            fields.append("%(lineno)4d")
        if verbosity <= logging.VERBOSE:
            fields.append("%(funcName)31s()")

        format_string = ("%(log_color)s" + " : ".join(fields) +
                         " :%(reset)s %(message)s")
        super(CLILoggingFormatter, self).__init__(format_string,
                                                  datefmt=datefmt,
                                                  reset=False,
                                                  log_colors=self.LOG_COLORS)


def main():
    """Console entry point for ``adp``."""
    CLI().run(sys.argv[1:])


if __name__ == "__main__":   # pragma: no cover
    main()
