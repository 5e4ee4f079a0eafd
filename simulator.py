"""Interactive CLI simulator — exercise the OTP flow without WhatsApp."""

import asyncio

from whatsapp_otp.channels.console import ConsoleChannel
from whatsapp_otp.config import settings
from whatsapp_otp.errors import InvalidCode, OTPError
from whatsapp_otp.services.verification_service import VerificationService

GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
CYAN = "\033[96m"
DIM = "\033[2m"
BOLD = "\033[1m"
RESET = "\033[0m"

HELP = (
    f"{DIM}Commands:\n"
    "  send <phone> [template]   issue a code (use {otp} in the template)\n"
    "  verify <phone> <code>     check a code\n"
    "  sweep                     evict expired codes now\n"
    "  status                    show live OTP count\n"
    f"  quit                      exit{RESET}\n"
)


async def main() -> None:
    print(f"\n{BOLD}{'=' * 52}")
    print(f"  🔐  {settings.app_name} — OTP Simulator")
    print(f"{'=' * 52}{RESET}\n")
    print(HELP)

    # ── Set up the service on the console channel ────────
    channel = ConsoleChannel()
    service = VerificationService.from_settings(settings, channel)
    await service.start()

    while True:
        try:
            line = input(f"{YELLOW}{BOLD}otp>{RESET} ").strip()
        except (KeyboardInterrupt, EOFError):
            print(f"\n{DIM}Goodbye!{RESET}")
            break

        if not line:
            continue

        command, _, rest = line.partition(" ")
        command = command.lower()

        if command == "quit":
            print(f"{DIM}Goodbye!{RESET}")
            break

        try:
            if command == "send" and rest:
                phone, _, template = rest.strip().partition(" ")
                result = await service.issue(phone, template or None)
                _, text = channel.sent[-1]
                print(f"{CYAN}📤 Delivered to {phone}:{RESET}\n{text}\n")
                print(f"{GREEN}Code {result.code} valid for {result.expires_in_seconds}s{RESET}\n")
            elif command == "verify" and len(rest.split()) == 2:
                phone, code = rest.split()
                service.verify(phone, code)
                print(f"{GREEN}✅ Verified {phone}{RESET}\n")
            elif command == "sweep":
                removed = service.sweeper.sweep_once()
                print(f"{DIM}Swept {removed} expired code(s){RESET}\n")
            elif command == "status":
                print(f"{DIM}Live OTPs: {service.active_count}{RESET}\n")
            else:
                print(HELP)
        except InvalidCode as exc:
            print(f"{RED}❌ {exc.message} ({exc.attempts_remaining} attempt(s) left){RESET}\n")
        except OTPError as exc:
            print(f"{RED}❌ {exc.kind}: {exc.message}{RESET}\n")

    await service.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
