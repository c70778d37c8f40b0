from __future__ import annotations

import logging
import tkinter as tk
from tkinter import ttk
from typing import Optional, Tuple

from linechart.chart import ChartDataModel
from linechart.data_model import InfoBoxPlacement, LineType, MarkerType
from linechart.samples import week_of_data
from linechart.scale import ChartRect
from linechart.settings import config_path, configure_logging, load_style

log = logging.getLogger(__name__)

PAD = 40


def hex_color(rgb: Tuple[int, int, int]) -> str:
    r, g, b = (max(0, min(255, int(c))) for c in rgb)
    return f"#{r:02x}{g:02x}{b:02x}"


class ChartViewer(tk.Tk):
    def __init__(self, model: ChartDataModel):
        super().__init__()
        self.model = model
        self.title(model.metadata.title or "Line chart")
        self.geometry("820x520")

        top = ttk.Frame(self, padding=8)
        top.pack(side="top", fill="x")
        ttk.Label(top, text=model.metadata.subtitle).pack(side="left")
        self.info_var = tk.StringVar(value="")
        ttk.Label(top, textvariable=self.info_var).pack(side="right")

        self.canvas = tk.Canvas(self, background="#fff", highlightthickness=0)
        self.canvas.pack(side="top", fill="both", expand=True)
        self.canvas.bind("<Configure>", self._on_canvas_configure)
        self.canvas.bind("<Motion>", self._on_motion)
        self.canvas.bind("<Leave>", self._on_canvas_leave)

        self._rect: Optional[ChartRect] = None

    def _chart_rect(self) -> ChartRect:
        cw = max(10, self.canvas.winfo_width())
        ch = max(10, self.canvas.winfo_height())
        return ChartRect(PAD, PAD, max(0, cw - 2 * PAD), max(0, ch - 2 * PAD))


    def _on_canvas_configure(self, _evt=None):
        self._rect = self._chart_rect()
        self._render_chart()


    def _render_chart(self):
        self.canvas.delete("all")
        rect = self._rect
        if rect is None:
            return
        if not self.model.has_enough_data():
            self.canvas.create_text(rect.x + rect.width / 2, rect.y + rect.height / 2, text=self.model.no_data_text)
            return

        for s in self.model.data_sets:
            pts = [rect.to_surface(x, y) for x, y in self.model.point_markers(s, rect)]
            if len(pts) < 2:
                continue
            color = hex_color(s.style.color)
            flat = [c for p in pts for c in p]
            self.canvas.create_line(*flat, fill=color, width=s.style.stroke_width,
                                    smooth=(s.style.line_type == LineType.CURVED))
            r = s.point_style.point_size / 2
            for x, y in pts:
                self.canvas.create_oval(x - r, y - r, x + r, y + r,
                                        outline=hex_color(s.point_style.border_color),
                                        fill=hex_color(s.point_style.fill_color),
                                        width=s.point_style.line_width)

        labels = self.model.get_axis_labels()
        for i, text in enumerate(labels):
            x = rect.x + (rect.width * i / (len(labels) - 1) if len(labels) > 1 else rect.width / 2)
            self.canvas.create_text(x, rect.y + rect.height + PAD / 2, text=text,
                                    fill=hex_color(self.model.chart_style.x_axis_label_color))

        for i, entry in enumerate(self.model.get_legend_entries()):
            x = rect.x + i * 120
            self.canvas.create_rectangle(x, 12, x + 12, 24, fill=hex_color(entry.style.color), outline="")
            self.canvas.create_text(x + 18, 18, text=entry.title, anchor="w")

        self._redraw_overlay()


    def _redraw_overlay(self):
        self.canvas.delete("overlay")
        rect = self._rect
        info = self.model.touch_info
        if rect is None or not info.is_touch_current or info.touch_location is None:
            self.info_var.set("")
            return

        marker_type = self.model.chart_style.marker_type
        for m in self.model.touch_markers(info.touch_location, rect):
            x, y = rect.to_surface(m.x, m.y)
            color = hex_color(m.color)
            if marker_type in (MarkerType.VERTICAL, MarkerType.FULL):
                self.canvas.create_line(x, rect.y, x, rect.y + rect.height, fill=color, dash=(4, 2), tags=("overlay",))
            if marker_type == MarkerType.FULL:
                self.canvas.create_line(rect.x, y, rect.x + rect.width, y, fill=color, dash=(4, 2), tags=("overlay",))
            self.canvas.create_oval(x - 5, y - 5, x + 5, y + 5, outline=color, width=2, tags=("overlay",))
            if self.model.chart_style.info_box_placement == InfoBoxPlacement.FLOATING:
                self.canvas.create_text(x + 8, y - 8, text=m.label, anchor="sw", fill=color, tags=("overlay",))

        self.info_var.set("   ".join(
            f"{p.display_label()} {p.formatted_value()}" for p in info.points
        ))


    def _on_motion(self, event):
        rect = self._rect
        if rect is None:
            return
        local = rect.to_local(event.x, event.y)
        self.model.resolve_touch(local, rect)
        self._redraw_overlay()


    def _on_canvas_leave(self, _event):
        self.model.end_touch()
        self._redraw_overlay()


def main():
    configure_logging()
    model = week_of_data()
    if config_path().exists():
        model.chart_style = load_style()
        log.info("style loaded from %s", config_path())
    app = ChartViewer(model)
    app.mainloop()


if __name__ == "__main__":
    main()
