"""
Grant or revoke the admin flag for a Telegram user.

The user must have talked to the bot at least once (/start or /registrar).
Usage: python init_admin.py <telegram_id> [--revoke]
"""
import argparse
import asyncio
import sys

from ggstore.core.config import get_settings
from ggstore.infrastructure.database import Database
from ggstore.modules.users import UserNotFoundError, UserService


async def set_admin_flag(user_id: int, is_admin: bool) -> int:
    settings = get_settings()
    database = Database.from_settings(settings.database)
    database.open()
    try:
        await database.create_all()
        service = UserService(database)
        try:
            user = await service.set_admin(user_id, is_admin)
        except UserNotFoundError:
            print(f"Usuário {user_id} não encontrado. Peça para ele enviar /start ao bot primeiro.")
            return 1
    finally:
        await database.close()

    print("=" * 50)
    action = "concedido a" if is_admin else "removido de"
    print(f"Acesso de administrador {action} {user.username} ({user.id})")
    print("=" * 50)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Grant the admin flag to a bot user")
    parser.add_argument("telegram_id", type=int, help="Telegram user id")
    parser.add_argument("--revoke", action="store_true", help="remove the admin flag instead")
    args = parser.parse_args(argv)
    return asyncio.run(set_admin_flag(args.telegram_id, not args.revoke))


if __name__ == "__main__":
    sys.exit(main())
