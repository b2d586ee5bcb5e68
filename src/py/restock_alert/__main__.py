import asyncio
import logging

from .core import StockSubject
from .subscribers import EmailSubscriber, SmsSubscriber


async def main() -> None:
    iphone_stock = StockSubject("iphone")

    await iphone_stock.register(EmailSubscriber("ashuisavid@gmail.com", iphone_stock))
    await iphone_stock.register(SmsSubscriber("763536281", iphone_stock))

    # stock becomes available
    await iphone_stock.set_count(20)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
