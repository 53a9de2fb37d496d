# SPDX-License-Identifier: MIT

from flowtrack.cleanup import register_cleanup
from flowtrack.initialize import initialize
from flowtrack.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
