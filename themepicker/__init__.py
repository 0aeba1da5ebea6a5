"""Theme picker: apply a color theme across Waybar, Hyprland and kitty."""

__version__ = "0.3.0"
