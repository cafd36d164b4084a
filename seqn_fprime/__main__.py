"""Package entry point for ``python -m seqn_fprime``.

RULES:
- ``--serve`` starts the HTTP API
- Without ``--serve``, falls through to the CLI
"""

import sys

if __name__ == "__main__":
    if "--serve" in sys.argv:
        from seqn_fprime.server.app import run_api
        run_api()
    else:
        from seqn_fprime.cli import main
        main()
