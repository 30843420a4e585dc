#!/usr/bin/env python3
# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

from __future__ import annotations

import functools
from pathlib import Path

from ...archive.pipeline import ArchivePipeline
from ...config import AppConfig, load_app_config
from ...core.errors import UserAbort
from ...core.models import BackupArtifact, BackupAttempt, BackupStatus, SecretRecord, Toolchain
from ...core.workspace import Workspace
from ...device.adb import AdbBridge
from ...device.backup import BackupOrchestrator
from ...recovery.discovery import discover_secrets
from ...tools.toolchain import ensure_toolchain
from ..api import (
    print_cleanup_summary,
    print_completion_panel,
    print_info,
    print_instructions,
    print_ok,
    print_secret_report,
    prompt_continue,
    prompt_required_secret,
    prompt_yes_no,
    status,
    wizard_flow,
    wizard_stage,
)
from ..core.log import _warn
from ..core.types import ExtractArgs
from ..startup import apply_ui_defaults, run_with_progress
from .apk import choose_apk, install_with_retry, require_apk, search_dirs

TOTAL_STEPS = 11

PHONE_PREP_STEPS = (
    "Uninstall the current Steam app (DO NOT remove Steam Guard / authenticator).",
    "Enable Developer Options and USB debugging.",
    "Connect the phone to this computer via USB.",
)

PLEASE_HELP_STEPS = (
    'If prompted "This app was built for an older version of Android", tap "OK".',
    "Log in with your account.",
    'When asked for an authenticator code, tap "Please Help".',
    'Tap "Use this device".',
    'Tap "OK!" Send me the text message.',
    "Verify with the SMS code, then Submit.",
    "You should see an error screen with your current OTP code at the bottom.",
)

CLOSE_APP_WARNING = (
    "Now FULLY CLOSE the Steam app (swipe it away) BEFORE the backup, "
    "or the backup will be an ~1KB empty file without your secret."
)


class InteractiveBackupOperator:
    """Drives the backup retry loop through terminal prompts."""

    def __init__(self, *, quiet: bool) -> None:
        self.quiet = quiet

    def confirm_app_closed(self, attempt: int, max_attempts: int) -> bool:
        print_info(
            f"Attempt #{attempt}/{max_attempts}. Make sure the app is FULLY CLOSED (swiped away).",
            quiet=self.quiet,
        )
        closed = prompt_yes_no("Is the Steam app fully closed?", default=False)
        if not closed:
            _warn("Close it fully first.")
        return closed

    def report_attempt(self, attempt: BackupAttempt) -> None:
        if attempt.status is BackupStatus.VALID:
            print_ok(f"Backup created: backup.ab ({attempt.size} bytes)", quiet=self.quiet)
        elif attempt.status is BackupStatus.TOO_SMALL:
            _warn(
                f"Backup attempt #{attempt.number} is too small "
                f"({attempt.size} bytes, ~1KB trap).",
                hint="The app was probably still running.",
            )
        elif attempt.status is BackupStatus.TOOL_FAILED:
            _warn(f"Backup attempt #{attempt.number} failed.")

    def offer_recovery(self, attempt: BackupAttempt) -> bool:
        accepted = prompt_yes_no(
            "Run helper: kill & relaunch Steam via ADB so you can redo the on-phone steps?",
            default=False,
        )
        if not accepted:
            _warn("Skipping helper; you can re-close the app yourself and retry.")
        return accepted

    def await_recovery_steps(self) -> None:
        print_instructions(
            "Helper: Kill & Relaunch Steam",
            [
                "The legacy Steam app was relaunched for you.",
                'On your phone: Login -> "Please Help" -> "Use this device" -> "OK!" '
                "-> reach the screen with your code.",
                "After you continue, the app is force-closed and the backup is retried.",
            ],
            quiet=False,
        )
        prompt_continue()


class RecoveryFlowController:
    def __init__(
        self,
        config: AppConfig,
        workspace: Workspace,
        *,
        apk: str | None = None,
        quiet: bool = False,
    ) -> None:
        self.config = config
        self.workspace = workspace
        self.apk = apk
        self.quiet = quiet
        self.package_id = config.app.package_id
        self.timeout = config.tools.timeout

    def provision_tools(self) -> Toolchain:
        runner = functools.partial(run_with_progress, quiet=self.quiet)
        toolchain = ensure_toolchain(self.workspace, self.config, runner=runner)
        print_ok(f"java ready: {toolchain.java}", quiet=self.quiet)
        print_ok(f"adb ready: {toolchain.adb}", quiet=self.quiet)
        print_ok(f"abe.jar ready: {toolchain.abe_jar}", quiet=self.quiet)
        return toolchain

    def prepare_phone(self) -> None:
        print_instructions("On your phone", PHONE_PREP_STEPS, quiet=False)
        prompt_continue()

    def connect_device(self, bridge: AdbBridge) -> None:
        with status("Restarting the adb server...", quiet=self.quiet):
            bridge.restart_server()
        for device in bridge.list_devices():
            print_info(f"{device.serial}\t{device.state}", quiet=self.quiet)
        print_info(
            "If you see 'unauthorized', unlock the phone and accept the USB debugging "
            "prompt, then continue to re-check.",
            quiet=self.quiet,
        )
        prompt_continue()
        devices = bridge.require_authorized_device()
        serials = " ".join(device.serial for device in devices)
        print_ok(f"Device(s) connected: {serials}", quiet=self.quiet)

    def select_apk(self) -> Path:
        if self.apk:
            return require_apk(self.apk)
        dirs = search_dirs(self.workspace.root, self.config.workspace.apk_search_dirs)
        return choose_apk(dirs, download_url=self.config.app.apk_download_url, quiet=self.quiet)

    def confirm_uninstalled(self) -> None:
        confirmed = prompt_yes_no(
            "Have you uninstalled the Steam app on your phone (without removing Steam Guard)?",
            default=False,
        )
        if not confirmed:
            raise UserAbort("Please uninstall the Steam app on the phone, then re-run.")

    def guide_recovery(self, bridge: AdbBridge) -> None:
        print_info(
            "Launching the legacy Steam app on your phone (accept permissions)...",
            quiet=self.quiet,
        )
        bridge.launch(self.package_id)
        print_info("If you do not see it, launch Steam manually on your phone.", quiet=self.quiet)
        prompt_continue()
        print_instructions("Do the 'Please Help' recovery flow", PLEASE_HELP_STEPS, quiet=False)
        _warn(CLOSE_APP_WARNING)
        prompt_continue()
        closed = prompt_yes_no("Is the Steam app fully closed (swiped away)?", default=False)
        if not closed:
            raise UserAbort("Please fully close the Steam app and re-run.")

    def create_backup(self, bridge: AdbBridge) -> BackupArtifact:
        print_info(
            "You will see a BACKUP prompt on your phone. Leave the PASSWORD BLANK and confirm.",
            quiet=self.quiet,
        )
        orchestrator = BackupOrchestrator(
            bridge,
            InteractiveBackupOperator(quiet=self.quiet),
            package_id=self.package_id,
            dest=self.workspace.backup_path,
            max_attempts=self.config.backup.max_attempts,
            min_size=self.config.backup.min_size,
        )
        return orchestrator.run()

    def unpack_and_expand(self, toolchain: Toolchain) -> Path:
        pipeline = ArchivePipeline(
            java=toolchain.java,
            abe_jar=toolchain.abe_jar,
            backup_path=self.workspace.backup_path,
            archive_path=self.workspace.archive_path,
            tree_dir=self.workspace.tree_dir,
            timeout=self.timeout,
        )
        print_info("Unpacking backup.ab with abe.jar...", quiet=self.quiet)
        archive = pipeline.unpack_with_password_fallback(self._ask_backup_password)
        print_ok(f"Unpacked to backup.tar ({archive.stat().st_size} bytes)", quiet=self.quiet)
        return pipeline.expand()

    def _ask_backup_password(self) -> str | None:
        _warn(
            "Failed to unpack with abe.jar.",
            hint="If you set a backup password on the phone, it must be supplied now.",
        )
        if not prompt_yes_no("Did you set a backup password on the phone? Provide it now?"):
            return None
        return prompt_required_secret("Backup password (input hidden)")

    def report_secrets(self, tree: Path) -> list[SecretRecord]:
        records = discover_secrets(tree, self.package_id)
        print_secret_report(records, quiet=self.quiet)
        return records

    def offer_cleanup(self) -> None:
        remove = prompt_yes_no(
            "Clean up ALL artifacts and tools now? "
            "(backups + extracted files + JRE + platform-tools + abe.jar)",
            default=False,
        )
        if remove:
            print_cleanup_summary(self.workspace.cleanup(), quiet=self.quiet)
            print_ok("Everything cleaned up.", quiet=self.quiet)
        else:
            _warn(
                "Backup files and extracted data are sensitive.",
                hint="Delete them when finished.",
            )

    def run(self) -> list[SecretRecord]:
        with wizard_flow(total_steps=TOTAL_STEPS, quiet=self.quiet):
            with wizard_stage("Download tools (Java, adb, abe.jar)"):
                toolchain = self.provision_tools()
            bridge = AdbBridge(toolchain.adb, timeout=self.timeout)
            with wizard_stage("Before we continue"):
                self.prepare_phone()
            with wizard_stage("Connect phone & authorize ADB"):
                self.connect_device(bridge)
            with wizard_stage("Legacy Steam 2.1.4 APK"):
                apk = self.select_apk()
            with wizard_stage("Confirm you uninstalled Steam (but kept Steam Guard)"):
                self.confirm_uninstalled()
            with wizard_stage("Install legacy Steam (with target-SDK bypass)"):
                install_with_retry(bridge, apk, quiet=self.quiet)
            with wizard_stage("Do the 'Please Help' recovery flow on the phone"):
                self.guide_recovery(bridge)
            with wizard_stage("Create Android backup of Steam data (adb backup)"):
                self.create_backup(bridge)
            with wizard_stage("Unpack and extract backup.ab"):
                tree = self.unpack_and_expand(toolchain)
            with wizard_stage("Find Steam Guard secret(s)"):
                records = self.report_secrets(tree)
            print_completion_panel(
                "All done!",
                [
                    "Import 'steam-uri' or 'otpauth-universal' above into your OTP app.",
                    "You may now update the Steam app through the Google Play Store.",
                ],
                quiet=self.quiet,
            )
            with wizard_stage("Clean up"):
                self.offer_cleanup()
        return records


def resolve_workspace(config: AppConfig, workdir: str | None) -> Workspace:
    if workdir:
        return Workspace.at(workdir)
    return Workspace.at(config.workspace.resolve_dir(Path.cwd()))


def run_extract(args: ExtractArgs) -> int:
    config = load_app_config(args.config)
    quiet = apply_ui_defaults(
        config,
        quiet=args.quiet,
        no_color=args.no_color,
        no_animations=args.no_animations,
    )
    workspace = resolve_workspace(config, args.workdir)
    print_info(f"Working directory: {workspace.root}", quiet=quiet)
    controller = RecoveryFlowController(
        config,
        workspace,
        apk=args.apk,
        quiet=quiet,
    )
    controller.run()
    return 0
