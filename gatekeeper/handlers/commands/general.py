# gatekeeper/handlers/commands/general.py
"""
Общие команды: help, ping, stats.
"""
import time
from collections import defaultdict
from typing import TYPE_CHECKING, Dict, List

from gatekeeper.services.commands import Command, CommandContext

if TYPE_CHECKING:
    from gatekeeper.services.gatekeeper_service import GatekeeperService


def format_uptime(seconds: float) -> str:
    seconds = int(seconds)
    days, rest = divmod(seconds, 24 * 3600)
    hours, rest = divmod(rest, 3600)
    minutes = rest // 60

    parts = []
    if days:
        parts.append(f"{days}d")
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if not parts:
        parts.append(f"{seconds}s")
    return " ".join(parts)


def general_commands(service: "GatekeeperService") -> List[Command]:

    async def cmd_help(ctx: CommandContext) -> None:
        show_restricted = service.permissions.is_admin(ctx.actor)
        grouped: Dict[str, List[Command]] = defaultdict(list)
        for command in service.registry.commands():
            if command.restricted and not show_restricted:
                continue
            grouped[command.category].append(command)

        lines = [ctx.t("COMMON.HELP_HEADER"), ""]
        for category in sorted(grouped):
            lines.append(ctx.t("COMMON.HELP_CATEGORY", category=category.upper()))
            for command in sorted(grouped[category], key=lambda c: c.name):
                line = f"• {ctx.prefix}{command.name}"
                if command.usage:
                    line += f" {command.usage}"
                if command.description:
                    line += f" - {command.description}"
                lines.append(line)
            lines.append("")
        lines.append(ctx.t("COMMON.HELP_FOOTER"))
        await ctx.reply("\n".join(lines))

    async def cmd_ping(ctx: CommandContext) -> None:
        latency = max(0, int((time.time() - ctx.received_at) * 1000))
        await ctx.reply(ctx.t("COMMON.PING", latency=latency))

    async def cmd_stats(ctx: CommandContext) -> None:
        stats = service.stats()
        await ctx.reply(
            ctx.t(
                "COMMON.STATS",
                uptime=format_uptime(stats["uptime"]),
                commands=stats["commands_handled"],
                users=stats["users_served"],
                blocks=stats["security_blocks"],
            )
        )

    return [
        Command(
            name="help",
            aliases=frozenset({"h", "menu"}),
            description="Show available commands",
            handler=cmd_help,
        ),
        Command(name="ping", description="Check bot response time", handler=cmd_ping),
        Command(name="stats", description="Show bot statistics", handler=cmd_stats, cooldown_seconds=5),
    ]
