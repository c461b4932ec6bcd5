# gatekeeper/handlers/commands/admin.py
"""
Команды модерации: явная блокировка и отчеты шлюза безопасности.
"""
from datetime import datetime, timezone
from typing import TYPE_CHECKING, List, Optional

from gatekeeper.services.commands import Command, CommandContext

if TYPE_CHECKING:
    from gatekeeper.services.gatekeeper_service import GatekeeperService


async def _target(ctx: CommandContext) -> Optional[str]:
    if not ctx.args:
        await ctx.reply(ctx.t("ERRORS.INVALID_SYNTAX", usage=ctx.command.usage))
        return None
    return ctx.args[0].lstrip("@")


def admin_commands(service: "GatekeeperService") -> List[Command]:
    gate = service.gate

    async def cmd_block(ctx: CommandContext) -> None:
        target = await _target(ctx)
        if target is None:
            return
        await gate.block(target)
        await ctx.reply(ctx.t("ADMIN.BLOCKED", target=target))

    async def cmd_unblock(ctx: CommandContext) -> None:
        target = await _target(ctx)
        if target is None:
            return
        if await gate.unblock(target):
            await ctx.reply(ctx.t("ADMIN.UNBLOCKED", target=target))
        else:
            await ctx.reply(ctx.t("ADMIN.NOT_BLOCKED", target=target))

    async def cmd_security(ctx: CommandContext) -> None:
        await ctx.reply(ctx.t("ADMIN.SECURITY_REPORT", **gate.report()))

    async def cmd_warnings(ctx: CommandContext) -> None:
        target = await _target(ctx)
        if target is None:
            return
        record = gate.get_record(target)
        if record is None or not record.warning_count:
            await ctx.reply(ctx.t("ADMIN.NO_WARNINGS", target=target))
            return
        history = "\n".join(
            f"• {datetime.fromtimestamp(w.timestamp, tz=timezone.utc):%Y-%m-%d %H:%M} {w.reason.value}"
            for w in record.warning_history[-10:]
        )
        await ctx.reply(
            ctx.t(
                "ADMIN.WARNINGS",
                target=target,
                count=record.warning_count,
                requests=gate.limiter.count(target),
                history=history,
            )
        )

    async def cmd_resetwarn(ctx: CommandContext) -> None:
        target = await _target(ctx)
        if target is None:
            return
        gate.reset_warnings(target)
        await ctx.reply(ctx.t("ADMIN.WARNINGS_RESET", target=target))

    async def cmd_resetcd(ctx: CommandContext) -> None:
        target = await _target(ctx)
        if target is None:
            return
        command_name = ctx.args[1].lower() if len(ctx.args) > 1 else None
        cleared = service.cooldowns.reset(target, command_name)
        gate.limiter.reset(target)
        await ctx.reply(ctx.t("ADMIN.COOLDOWNS_RESET", target=target, count=cleared))

    async def cmd_audit(ctx: CommandContext) -> None:
        limit = int(ctx.args[0]) if ctx.args and ctx.args[0].isdigit() else 10
        records = service.dispatcher.recent(max(1, min(limit, 50)))
        if not records:
            await ctx.reply(ctx.t("ADMIN.AUDIT_EMPTY"))
            return
        lines = [ctx.t("ADMIN.AUDIT_HEADER", count=len(records))]
        lines.extend(
            f"• {datetime.fromtimestamp(r.timestamp, tz=timezone.utc):%H:%M:%S} "
            f"{ctx.prefix}{r.command} by {r.actor}"
            for r in records
        )
        await ctx.reply("\n".join(lines))

    return [
        Command(
            name="block",
            aliases=frozenset({"ban"}),
            category="moderation",
            description="Block an id",
            usage="<id>",
            owner_only=True,
            handler=cmd_block,
        ),
        Command(
            name="unblock",
            aliases=frozenset({"unban"}),
            category="moderation",
            description="Unblock an id",
            usage="<id>",
            owner_only=True,
            handler=cmd_unblock,
        ),
        Command(
            name="security",
            aliases=frozenset({"secreport"}),
            category="moderation",
            description="Security report",
            admin_only=True,
            handler=cmd_security,
        ),
        Command(
            name="warnings",
            category="moderation",
            description="Show warnings of an id",
            usage="<id>",
            admin_only=True,
            handler=cmd_warnings,
        ),
        Command(
            name="resetwarn",
            category="moderation",
            description="Reset warnings of an id",
            usage="<id>",
            admin_only=True,
            handler=cmd_resetwarn,
        ),
        Command(
            name="resetcd",
            category="moderation",
            description="Clear cooldowns and rate window of an id",
            usage="<id> [command]",
            admin_only=True,
            handler=cmd_resetcd,
        ),
        Command(
            name="audit",
            category="moderation",
            description="Show recently executed commands",
            usage="[count]",
            admin_only=True,
            handler=cmd_audit,
        ),
    ]
