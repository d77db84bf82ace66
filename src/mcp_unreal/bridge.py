"""
Bridge bootstrap.

Wires the pieces together in startup order:

    config -> host -> registry (domains registered, then frozen)
           -> host thread -> execution bridge -> dispatcher -> HTTP app

Standalone (sandbox) use runs the host thread on its own daemon thread and
serves HTTP in the foreground. Inside the Unreal Editor, ``start_in_editor``
binds the host thread to the editor's game thread, drains the queue from a
Slate post-tick callback and serves HTTP on a background thread.
"""

import logging
from typing import Any, Optional

from .core.config import BridgeConfig
from .core.constants import PLUGIN_NAME, PLUGIN_VERSION
from .core.logging import configure_logging
from .dispatcher import Dispatcher
from .domains import register_all_domains
from .editor.execution_bridge import ExecutionBridge
from .editor.host_thread import HostThread
from .host.interfaces import EditorHost
from .registry import CommandRegistry
from .transport.http_server import BridgeServer, create_app

logger = logging.getLogger(__name__)


class Bridge:
    """One fully wired command bridge."""

    def __init__(self, config: BridgeConfig, host: EditorHost):
        """
        Initialize Bridge.

        Registers every enabled capability domain and freezes the registry;
        nothing is started yet.

        Args:
            config: Bridge configuration
            host: Editor host providing the capability providers
        """
        self.config = config
        self.host = host

        self.registry = CommandRegistry()
        self.domains = register_all_domains(self.registry, host, config, status=self.status)
        self.registry.freeze()

        self.host_thread = HostThread()
        self.execution = ExecutionBridge(self.host_thread, timeout=config.command_timeout)
        self.dispatcher = Dispatcher(self.registry, self.execution)
        self.app = create_app(self.dispatcher, self.status)
        self._server: Optional[BridgeServer] = None

    @property
    def server(self) -> BridgeServer:
        if self._server is None:
            self._server = BridgeServer(
                self.app,
                host=self.config.host,
                port=self.config.port,
                log_level=self.config.log_level,
            )
        return self._server

    def status(self) -> dict[str, Any]:
        """Status payload shared by ``system.status`` and ``/api/status``."""
        return {
            "name": PLUGIN_NAME,
            "version": PLUGIN_VERSION,
            "host": self.host.kind,
            "project": self.host.project_name,
            "engine_version": self.host.engine_version,
            "listen": f"{self.config.host}:{self.config.port}",
            "port": self.config.port,
            "capabilities": self.registry.domains(),
            "command_count": len(self.registry),
            "pending_tickets": self.execution.pending_count,
            "host_thread_running": self.host_thread.running,
            "command_timeout": self.config.command_timeout,
        }

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self) -> None:
        """Start the host thread and serve HTTP on a background thread."""
        if not self.host_thread.running:
            self.host_thread.start()
        self.server.start()

    def serve_forever(self) -> None:
        """Start the host thread and serve HTTP in the foreground."""
        if not self.host_thread.running:
            self.host_thread.start()
        try:
            self.server.serve()
        finally:
            self.host_thread.stop()

    def stop(self) -> None:
        """Stop serving and release the host thread."""
        if self._server is not None:
            self._server.stop()
        self.host_thread.stop()


def build_bridge(config: Optional[BridgeConfig] = None, host: Optional[EditorHost] = None) -> Bridge:
    """
    Build a bridge from configuration and a host.

    Args:
        config: Configuration (loaded from file/environment when omitted)
        host: Editor host (a seeded SandboxEditorHost when omitted)

    Returns:
        Wired, not yet started Bridge
    """
    if config is None:
        config = BridgeConfig.load()
    if host is None:
        from .host.sandbox import SandboxEditorHost

        host = SandboxEditorHost()

    bridge = Bridge(config, host)
    logger.info(
        f"{PLUGIN_NAME} {PLUGIN_VERSION} bridge built for {host.kind} host "
        f"with {len(bridge.registry)} commands"
    )
    return bridge


# =============================================================================
# In-editor lifecycle
# =============================================================================

_editor_bridge: Optional[Bridge] = None
_tick_handle: Any = None


def start_in_editor(config: Optional[BridgeConfig] = None) -> Bridge:
    """
    Start the bridge inside the Unreal Editor.

    Must be called from the editor's game thread (e.g. an init_unreal.py
    startup script). The game thread becomes the host thread.

    Args:
        config: Configuration (loaded from file/environment when omitted)

    Returns:
        The running bridge
    """
    global _editor_bridge, _tick_handle

    if _editor_bridge is not None:
        logger.warning("Bridge is already running in this editor")
        return _editor_bridge

    import unreal

    from .host.unreal_host import UnrealEditorHost

    if config is None:
        config = BridgeConfig.load()
    configure_logging(config.log_level, config.log_file)

    bridge = build_bridge(config, UnrealEditorHost(unreal))
    bridge.host_thread.bind_current_thread()

    def _pump(delta_seconds: float) -> None:
        bridge.host_thread.pump()

    _tick_handle = unreal.register_slate_post_tick_callback(_pump)
    try:
        bridge.server.start()
    except RuntimeError:
        unreal.unregister_slate_post_tick_callback(_tick_handle)
        _tick_handle = None
        bridge.host_thread.stop()
        raise

    _editor_bridge = bridge
    logger.info(f"{PLUGIN_NAME} bridge running in editor on {bridge.server.url}")
    return bridge


def stop_in_editor() -> None:
    """Stop the in-editor bridge started by :func:`start_in_editor`."""
    global _editor_bridge, _tick_handle

    if _editor_bridge is None:
        return

    import unreal

    if _tick_handle is not None:
        unreal.unregister_slate_post_tick_callback(_tick_handle)
        _tick_handle = None

    _editor_bridge.stop()
    _editor_bridge = None
    logger.info(f"{PLUGIN_NAME} bridge stopped")
