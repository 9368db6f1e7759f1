"""
Ledger 진입점

실행 방법:
    python -m runtime
"""

import asyncio

from runtime.bootstrap import main

if __name__ == "__main__":
    asyncio.run(main())
