"""Default configuration parameters for the sidebar auto-hide engine."""

from dataclasses import dataclass


@dataclass(frozen=True)
class IntentTimings:
    """Settle windows for hover intent."""
    expand_delay_ms: int = 300                       # Dwell before an expand fires
    collapse_delay_ms: int = 500                     # Absence before a collapse fires


@dataclass(frozen=True)
class ReattachParams:
    """Responsive re-attachment after window resizes."""
    resize_debounce_ms: int = 200                    # Quiet period before re-checking
    resize_followup_ms: int = 600                    # Second check for late layout changes


@dataclass(frozen=True)
class PauseParams:
    """Collapse pause after menu interactions."""
    menu_click_pause_ms: int = 1500                  # Wait for a dialog to appear


@dataclass(frozen=True)
class PanelSelectors:
    """Where the panel, its toggle and its state markers live in the host page."""
    panel: str = "bard-sidenav"
    toggle: tuple[str, ...] = (
        'button[data-test-id="side-nav-menu-button"]',
        "side-nav-menu-button button",
    )
    content: str = "bard-sidenav side-navigation-content > div"
    collapsed_class: str = "collapsed"
    opened_body_class: str = "mat-sidenav-opened"
    pinned_class: str = "side-nav-pinned"
    collapsed_max_width_px: int = 80                 # Narrower panels count as collapsed


@dataclass(frozen=True)
class GuardSelectors:
    """Elements whose visible presence blocks an automatic collapse."""
    selectors: tuple[str, ...] = (
        ".mat-mdc-dialog-container",
        ".mat-mdc-menu-panel",
        ".gv-folder-dialog",
        ".gv-folder-dialog-overlay",
        ".gv-folder-confirm-dialog",
        ".gv-folder-import-dialog",
        ".gv-folder-menu",
        ".gv-color-picker-dialog",
    )


@dataclass(frozen=True)
class MenuClickSelectors:
    """Click targets that may open a dialog and so pause collapsing."""
    menu_items: str = '[role="menuitem"], [role="menuitemradio"], .mat-mdc-menu-item'
    panel_buttons: str = 'bard-sidenav button, bard-sidenav [role="button"]'
    options_buttons: str = (
        '[data-test-id*="options"], [aria-label*="选项"], '
        '[aria-label*="Options"], [aria-label*="More"]'
    )


@dataclass(frozen=True)
class BehaviorParams:
    """Optional behaviours around enable and disable."""
    collapse_on_start: bool = True                   # Collapse once after enabling
    restore_on_disable: bool = True                  # Re-expand what the engine collapsed


@dataclass(frozen=True)
class SettingsParams:
    """Settings store key holding the enable flag."""
    storage_key: str = "gvSidebarAutoHide"
    storage_area: str = "sync"


@dataclass(frozen=True)
class AutoHideParams:
    """Complete engine configuration."""
    timings: IntentTimings
    reattach: ReattachParams
    pause: PauseParams
    panel: PanelSelectors
    guards: GuardSelectors
    menu_click: MenuClickSelectors
    behavior: BehaviorParams
    settings: SettingsParams


def get_default_config() -> AutoHideParams:
    """Get the default configuration instance."""
    return AutoHideParams(
        timings=IntentTimings(),
        reattach=ReattachParams(),
        pause=PauseParams(),
        panel=PanelSelectors(),
        guards=GuardSelectors(),
        menu_click=MenuClickSelectors(),
        behavior=BehaviorParams(),
        settings=SettingsParams(),
    )
