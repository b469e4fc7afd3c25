"""
PDF Table Recognizer - GUI Application
"""

import tkinter as tk
from tkinter import ttk, filedialog, messagebox
import os
import threading
import traceback
from PIL import Image, ImageTk
import pdfplumber

from grid_engine import TableExtractionError
from grid_engine.pipeline import PipelineConfig
from grid_engine.export import DEFAULT_TABLE_FILENAME
from scripts.Pdf_to_table import PdfTableConverter
from attendance import (
    AttendanceBook, RosterStore, MASS_SCHEDULE, MEETING_OPTIONS,
    mass_times_for, export_attendance_report,
)
from attendance.report import DEFAULT_REPORT_FILENAME


class PDFTableRecognizerApp:
    _IMG_CACHE_SIZE = 4

    def __init__(self, root, roster_path=None):
        self.root = root
        self.root.title("PDF Table Recognizer")
        self.root.geometry("1200x800")
        self.root.minsize(900, 600)

        self.style = ttk.Style()
        self.style.theme_use('clam')

        # --- Theme Colors ---
        self.bg_app = "#fafafa"
        self.bg_card = "#ffffff"
        self.primary_color = "#0969da"
        self.text_color = "#333333"
        self.text_muted = "#666666"

        self.style.configure("TFrame", background=self.bg_app)
        self.style.configure("Card.TFrame", background=self.bg_card, relief="solid", borderwidth=1)
        self.style.configure("TLabel", background=self.bg_app, foreground=self.text_color, font=("Segoe UI", 9))
        self.style.configure("Card.TLabel", background=self.bg_card, foreground=self.text_color, font=("Segoe UI", 9))
        self.style.configure("Section.TLabel", background=self.bg_card, foreground=self.text_muted, font=("Segoe UI", 9, "bold"))
        self.style.configure("Status.TLabel", background=self.bg_app, foreground=self.text_muted, font=("Segoe UI", 8))
        self.style.configure("Primary.TButton",
                             background=self.primary_color,
                             foreground="#ffffff",
                             borderwidth=0,
                             relief="flat",
                             padding=8,
                             font=("Segoe UI", 10, "bold"))
        self.style.map("Primary.TButton",
                       background=[("active", "#085dc0"), ("pressed", "#0750a4")])
        self.style.configure("Treeview", rowheight=24, font=("Segoe UI", 9))
        self.style.configure("Treeview.Heading", font=("Segoe UI", 9, "bold"))

        self.converter = PdfTableConverter(PipelineConfig.default())
        self.pdf_path = None
        self.total_pages = 0
        self.current_page = 1
        self._worker_running = False
        self._job_id = 0  # stale after() callbacks are discarded

        self.book = AttendanceBook()
        self.roster = RosterStore(roster_path) if roster_path else RosterStore()

        # Minimal file log (no console needed)
        try:
            self._log_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "app.log")
        except Exception:
            self._log_path = "app.log"

        # Cached pdfplumber handle (avoid re-opening per render)
        self._pdf_handle = None
        self.pdf_images = {}
        self._img_lru = []

        self._create_ui()
        self._load_roster()

    # ==================== UI ====================

    def _create_ui(self):
        self.notebook = ttk.Notebook(self.root)
        self.notebook.pack(fill=tk.BOTH, expand=True, padx=10, pady=10)

        self.tab_table = ttk.Frame(self.notebook)
        self.notebook.add(self.tab_table, text="PDF to Excel")
        self._create_table_tab(self.tab_table)

        self.tab_attendance = ttk.Frame(self.notebook)
        self.notebook.add(self.tab_attendance, text="Attendance")
        self._create_attendance_tab(self.tab_attendance)

        self.status_var = tk.StringVar(value="Ready")
        ttk.Label(self.root, textvariable=self.status_var, style="Status.TLabel").pack(fill=tk.X, side=tk.BOTTOM, padx=10)

    def _create_table_tab(self, parent):
        sidebar = ttk.Frame(parent, width=260)
        sidebar.pack(side=tk.LEFT, fill=tk.Y)
        sidebar.pack_propagate(False)

        self.btn_open_pdf = ttk.Button(sidebar, text="Open PDF Document", command=self._browse_file, style="Primary.TButton")
        self.btn_open_pdf.pack(fill=tk.X, padx=12, pady=(12, 6))
        self.lbl_file_status = ttk.Label(sidebar, text="No file selected", style="Status.TLabel")
        self.lbl_file_status.pack(anchor=tk.W, padx=12, pady=(0, 12))

        card = ttk.Frame(sidebar, style="Card.TFrame", padding=12)
        card.pack(fill=tk.X, padx=12)
        ttk.Label(card, text="THRESHOLDS", style="Section.TLabel").pack(anchor=tk.W, pady=(0, 8))

        ttk.Label(card, text="Column tolerance", style="Card.TLabel").pack(anchor=tk.W)
        self.var_col_threshold = tk.DoubleVar(value=self.converter.config.cluster_config.column_threshold)
        ttk.Spinbox(card, from_=1, to=100, increment=1, textvariable=self.var_col_threshold, width=8).pack(anchor=tk.W, pady=(0, 8))

        ttk.Label(card, text="Row tolerance", style="Card.TLabel").pack(anchor=tk.W)
        self.var_row_threshold = tk.DoubleVar(value=self.converter.config.cluster_config.row_threshold)
        ttk.Spinbox(card, from_=1, to=50, increment=1, textvariable=self.var_row_threshold, width=8).pack(anchor=tk.W, pady=(0, 12))

        self.btn_convert = ttk.Button(card, text="Convert to Excel", command=self._convert, state=tk.DISABLED)
        self.btn_convert.pack(fill=tk.X, pady=4)
        self.btn_copy = ttk.Button(card, text="Copy Table", command=self._copy_to_clipboard, state=tk.DISABLED)
        self.btn_copy.pack(fill=tk.X, pady=4)

        split = ttk.PanedWindow(parent, orient=tk.HORIZONTAL)
        split.pack(side=tk.RIGHT, fill=tk.BOTH, expand=True)

        # PDF Pane
        frame_pdf = ttk.Frame(split)
        nav = ttk.Frame(frame_pdf)
        nav.pack(fill=tk.X, ipady=4)
        ttk.Button(nav, text="‹", width=3, command=self._prev_page).pack(side=tk.LEFT, padx=1)
        self.lbl_page = ttk.Label(nav, text="0 / 0")
        self.lbl_page.pack(side=tk.LEFT, padx=8)
        ttk.Button(nav, text="›", width=3, command=self._next_page).pack(side=tk.LEFT, padx=1)

        self.canvas_pdf = tk.Canvas(frame_pdf, bg="#525659", highlightthickness=0)
        v_scroll = ttk.Scrollbar(frame_pdf, orient="vertical", command=self.canvas_pdf.yview)
        self.canvas_pdf.configure(yscrollcommand=v_scroll.set)
        v_scroll.pack(side=tk.RIGHT, fill=tk.Y)
        self.canvas_pdf.pack(fill=tk.BOTH, expand=True)

        # Grid Pane
        frame_grid = ttk.Frame(split)
        self.tree_grid = ttk.Treeview(frame_grid, show="headings")
        grid_v = ttk.Scrollbar(frame_grid, orient="vertical", command=self.tree_grid.yview)
        grid_h = ttk.Scrollbar(frame_grid, orient="horizontal", command=self.tree_grid.xview)
        self.tree_grid.configure(yscrollcommand=grid_v.set, xscrollcommand=grid_h.set)
        grid_v.pack(side=tk.RIGHT, fill=tk.Y)
        grid_h.pack(side=tk.BOTTOM, fill=tk.X)
        self.tree_grid.pack(fill=tk.BOTH, expand=True)

        split.add(frame_pdf, weight=1)
        split.add(frame_grid, weight=1)

    def _create_attendance_tab(self, parent):
        left = ttk.Frame(parent)
        left.pack(side=tk.LEFT, fill=tk.Y, padx=(0, 10))

        # --- Card: Record Attendance ---
        card_record = ttk.Frame(left, style="Card.TFrame", padding=12)
        card_record.pack(fill=tk.X, pady=(0, 12))
        ttk.Label(card_record, text="RECORD ATTENDANCE", style="Section.TLabel").pack(anchor=tk.W, pady=(0, 8))

        self.var_student = tk.StringVar()
        self.var_day = tk.StringVar()
        self.var_mass = tk.StringVar()
        self.var_meeting = tk.StringVar()

        ttk.Label(card_record, text="Student", style="Card.TLabel").pack(anchor=tk.W)
        self.combo_student = ttk.Combobox(card_record, textvariable=self.var_student, state="readonly")
        self.combo_student.pack(fill=tk.X, pady=(0, 6))

        ttk.Label(card_record, text="Day of Week", style="Card.TLabel").pack(anchor=tk.W)
        combo_day = ttk.Combobox(card_record, textvariable=self.var_day, values=list(MASS_SCHEDULE), state="readonly")
        combo_day.pack(fill=tk.X, pady=(0, 6))
        combo_day.bind("<<ComboboxSelected>>", self._on_day_selected)

        ttk.Label(card_record, text="Mass Time", style="Card.TLabel").pack(anchor=tk.W)
        self.combo_mass = ttk.Combobox(card_record, textvariable=self.var_mass, state="readonly")
        self.combo_mass.pack(fill=tk.X, pady=(0, 6))

        ttk.Label(card_record, text="Meeting Attended (+5)", style="Card.TLabel").pack(anchor=tk.W)
        ttk.Combobox(card_record, textvariable=self.var_meeting, values=list(MEETING_OPTIONS), state="readonly").pack(fill=tk.X, pady=(0, 10))

        ttk.Button(card_record, text="Record Attendance", command=self._record_attendance, style="Primary.TButton").pack(fill=tk.X)

        # --- Card: Manage Students ---
        card_roster = ttk.Frame(left, style="Card.TFrame", padding=12)
        card_roster.pack(fill=tk.X)
        ttk.Label(card_roster, text="MANAGE STUDENTS", style="Section.TLabel").pack(anchor=tk.W, pady=(0, 8))

        self.entry_add = ttk.Entry(card_roster)
        self.entry_add.pack(fill=tk.X)
        self.entry_add.bind("<Return>", lambda e: self._add_student())
        ttk.Button(card_roster, text="Add Student", command=self._add_student).pack(fill=tk.X, pady=(4, 10))

        self.entry_remove = ttk.Entry(card_roster)
        self.entry_remove.pack(fill=tk.X)
        self.entry_remove.bind("<Return>", lambda e: self._remove_student())
        ttk.Button(card_roster, text="Remove Student", command=self._remove_student).pack(fill=tk.X, pady=(4, 10))

        self.lbl_roster_count = ttk.Label(card_roster, text="Total students: 0", style="Card.TLabel")
        self.lbl_roster_count.pack(anchor=tk.W)

        # --- Reports ---
        right = ttk.Frame(parent)
        right.pack(side=tk.RIGHT, fill=tk.BOTH, expand=True)

        ttk.Label(right, text="Points Summary").pack(anchor=tk.W)
        self.tree_summary = ttk.Treeview(right, columns=("student", "points"), show="headings", height=8)
        self.tree_summary.heading("student", text="Student Name")
        self.tree_summary.heading("points", text="Total Points")
        self.tree_summary.pack(fill=tk.X, pady=(0, 12))

        ttk.Label(right, text="Recent Attendance").pack(anchor=tk.W)
        self.tree_records = ttk.Treeview(right, columns=("student", "day", "mass", "meeting", "points"), show="headings")
        for col, title in (("student", "Student"), ("day", "Day"), ("mass", "Mass Time"),
                           ("meeting", "Meeting"), ("points", "Points")):
            self.tree_records.heading(col, text=title)
        self.tree_records.pack(fill=tk.BOTH, expand=True)

        self.btn_export_report = ttk.Button(right, text="Export to Excel", command=self._export_report, state=tk.DISABLED)
        self.btn_export_report.pack(fill=tk.X, pady=(8, 0))

    # ==================== Infrastructure ====================

    def _close_pdf_handle(self):
        """Close the cached pdfplumber handle."""
        if self._pdf_handle is not None:
            try:
                self._pdf_handle.close()
            except Exception:
                pass
            self._pdf_handle = None

    def _get_pdf_handle(self):
        """Get (or open) the cached pdfplumber handle."""
        if self._pdf_handle is None and self.pdf_path:
            self._pdf_handle = pdfplumber.open(self.pdf_path)
        return self._pdf_handle

    def _report_bg_error(self, kind: str, error: Exception, tb_str: str):
        """Unified background error reporting (main thread only)."""
        short = str(error) if error is not None else "Unknown error"
        self._log(f"ERROR kind={kind} msg={short}\n{tb_str or ''}")
        self.status_var.set(f"{kind} failed: {short}")

    def _start_bg_task(self, kind: str, job_id: int, compute_fn, done_fn):
        """
        Run compute_fn() on a daemon thread.
        All UI updates must happen in done_fn (called on main thread).
        Any exception is caught and routed as (None, error, traceback) into done_fn.
        """
        def worker():
            try:
                payload = compute_fn()
                self.root.after(0, lambda: done_fn(payload, None, "", job_id))
            except Exception as e:
                tb = traceback.format_exc()
                self.root.after(0, lambda: done_fn(None, e, tb, job_id))
        threading.Thread(target=worker, daemon=True).start()

    def _log(self, msg: str):
        """Append one timestamped line to app.log (no console needed)."""
        import datetime
        try:
            with open(self._log_path, "a", encoding="utf-8") as f:
                f.write(f"{datetime.datetime.now():%Y-%m-%d %H:%M:%S}  {msg}\n")
        except OSError:
            pass

    def _set_busy(self, busy: bool):
        """Enable/disable action buttons during background work."""
        state = tk.DISABLED if busy else tk.NORMAL
        for btn in (self.btn_open_pdf, self.btn_convert):
            btn.config(state=state)
        self._worker_running = busy

    # ==================== PDF Table ====================

    def _browse_file(self):
        if self._worker_running:
            self.status_var.set("Cannot switch files while a conversion is running.")
            return
        path = filedialog.askopenfilename(filetypes=[("PDF", "*.pdf")])
        if path:
            self._job_id += 1
            self._close_pdf_handle()
            self.pdf_path = path
            try:
                self.lbl_file_status.config(text=os.path.basename(path))
                self.pdf_images = {}
                self._img_lru.clear()

                pdf = self._get_pdf_handle()
                self.total_pages = len(pdf.pages)
                self._log(f"OPEN path={path} pages={self.total_pages}")
                self._show_pdf_page(1)
                self.btn_convert.config(state=tk.NORMAL)
            except Exception as e:
                self._close_pdf_handle()
                self.pdf_path = None
                self.status_var.set(f"Failed to open PDF: {e}")
                self._log(f"OPEN_FAIL path={path} err={e}")

    def _show_pdf_page(self, page_num):
        if not self.pdf_path or page_num < 1 or page_num > self.total_pages: return
        try:
            if page_num not in self.pdf_images:
                pdf = self._get_pdf_handle()
                page = pdf.pages[page_num - 1]
                im = page.to_image(resolution=72).original
                width = max(1, self.canvas_pdf.winfo_width())
                if im.width > width > 1:
                    ratio = width / im.width
                    im = im.resize((width, int(im.height * ratio)), Image.Resampling.LANCZOS)
                self.pdf_images[page_num] = ImageTk.PhotoImage(im)

            # LRU: move to end, evict oldest if over limit
            if page_num in self._img_lru:
                self._img_lru.remove(page_num)
            self._img_lru.append(page_num)
            while len(self._img_lru) > self._IMG_CACHE_SIZE:
                old = self._img_lru.pop(0)
                self.pdf_images.pop(old, None)

            self.canvas_pdf.delete("all")
            self.canvas_pdf.create_image(0, 0, image=self.pdf_images[page_num], anchor=tk.NW)
            self.canvas_pdf.config(scrollregion=self.canvas_pdf.bbox(tk.ALL))
            self.current_page = page_num
            self.lbl_page.config(text=f"Page {page_num}/{self.total_pages}")
        except Exception as e:
            self.status_var.set(f"Page render error: {e}")

    def _prev_page(self):
        if self.current_page > 1:
            self._show_pdf_page(self.current_page - 1)

    def _next_page(self):
        if self.current_page < self.total_pages:
            self._show_pdf_page(self.current_page + 1)

    def _convert(self):
        if not self.pdf_path: return
        if self._worker_running:
            self.status_var.set("A conversion is already running...")
            return

        output_path = filedialog.asksaveasfilename(
            defaultextension=".xlsx",
            initialfile=DEFAULT_TABLE_FILENAME,
            filetypes=[("Excel Workbook", "*.xlsx")],
        )
        if not output_path:
            return

        try:
            cluster = self.converter.config.cluster_config
            cluster.column_threshold = float(self.var_col_threshold.get())
            cluster.row_threshold = float(self.var_row_threshold.get())
        except (tk.TclError, ValueError):
            messagebox.showerror("Error", "Thresholds must be numbers.")
            return

        self._job_id += 1
        my_job = self._job_id
        self._set_busy(True)
        self.status_var.set("Converting (background)...")
        pdf_path = self.pdf_path

        def compute():
            """Read bytes and run the pipeline in background thread, no Tk widget access."""
            with open(pdf_path, "rb") as f:
                data = f.read()
            return self.converter.convert(data, output_path)

        self._start_bg_task("CONVERT", my_job, compute, self._convert_done)

    def _convert_done(self, payload, error, tb_str="", job_id=None):
        """Show conversion results on main thread."""
        if job_id is not None and job_id != self._job_id:
            return
        self._set_busy(False)

        if error:
            if isinstance(error, TableExtractionError):
                self._log(f"CONVERT_FAIL kind={type(error).__name__} msg={error}")
                self.status_var.set(str(error))
            else:
                self._report_bg_error("CONVERT", error, tb_str)
            messagebox.showerror("Error", f"Conversion failed:\n{error}")
            return

        grid, debug = payload
        self._show_grid(grid)
        self.btn_copy.config(state=tk.NORMAL)
        self.status_var.set(f"Saved {debug.grid_rows} x {debug.grid_cols} table to {os.path.basename(debug.output_path)}")
        self._log(f"CONVERT rows={debug.grid_rows} cols={debug.grid_cols} "
                  f"fragments={debug.fragments_count} out={debug.output_path}")
        messagebox.showinfo("Export", f"Table exported successfully!\n\n{debug.output_path}")

    def _show_grid(self, grid):
        self.tree_grid.delete(*self.tree_grid.get_children())
        width = len(grid[0]) if grid else 0
        columns = [f"c{i}" for i in range(width)]
        self.tree_grid.configure(columns=columns)
        for i, col in enumerate(columns):
            self.tree_grid.heading(col, text=str(i + 1))
            self.tree_grid.column(col, width=100, stretch=False)
        for row in grid:
            self.tree_grid.insert("", tk.END, values=row)

    def _copy_to_clipboard(self):
        if self.converter.copy_to_clipboard():
            self.status_var.set("Table copied to clipboard")
        else:
            self.status_var.set("Clipboard unavailable")

    # ==================== Attendance ====================

    def _load_roster(self):
        try:
            self.roster.load()
        except (OSError, ValueError) as e:
            self.status_var.set(f"Could not load roster: {e}")
            self._log(f"ROSTER_LOAD_FAIL err={e}")
        self._refresh_roster()

    def _refresh_roster(self):
        self.combo_student.config(values=list(self.roster.students))
        if self.var_student.get() not in self.roster:
            self.var_student.set("")
        self.lbl_roster_count.config(text=f"Total students: {len(self.roster)}")

    def _refresh_reports(self):
        self.tree_summary.delete(*self.tree_summary.get_children())
        for name, points in self.book.ranking():
            self.tree_summary.insert("", tk.END, values=(name, points))

        self.tree_records.delete(*self.tree_records.get_children())
        for rec in self.book.recent(10):
            self.tree_records.insert("", tk.END, values=rec.as_row())

        self.btn_export_report.config(state=tk.NORMAL if self.book.count else tk.DISABLED)

    def _on_day_selected(self, event=None):
        times = mass_times_for(self.var_day.get())
        self.combo_mass.config(values=times)
        if self.var_mass.get() not in times:
            self.var_mass.set("")

    def _record_attendance(self):
        try:
            rec = self.book.record(
                self.var_student.get(),
                self.var_day.get(),
                self.var_mass.get(),
                self.var_meeting.get(),
            )
        except ValueError as e:
            messagebox.showerror("Error", str(e))
            return
        self._refresh_reports()
        self.status_var.set(f"Attendance recorded for {rec.student_name} ({rec.points} points)")

    def _add_student(self):
        try:
            name = self.roster.add(self.entry_add.get())
        except ValueError as e:
            messagebox.showerror("Error", str(e))
            return
        except OSError as e:
            messagebox.showerror("Error", f"Could not save roster:\n{e}")
            return
        self.entry_add.delete(0, tk.END)
        self._refresh_roster()
        self.status_var.set(f"{name} added successfully")

    def _remove_student(self):
        try:
            name = self.roster.remove(self.entry_remove.get())
        except ValueError as e:
            messagebox.showerror("Error", str(e))
            return
        except OSError as e:
            messagebox.showerror("Error", f"Could not save roster:\n{e}")
            return
        self.book.remove_student(name)
        self.entry_remove.delete(0, tk.END)
        self._refresh_roster()
        self._refresh_reports()
        self.status_var.set(f"{name} removed successfully")

    def _export_report(self):
        filename = filedialog.asksaveasfilename(
            defaultextension=".xlsx",
            initialfile=DEFAULT_REPORT_FILENAME,
            filetypes=[("Excel Workbook", "*.xlsx")],
        )
        if not filename:
            return
        try:
            written = export_attendance_report(self.book, filename)
        except (OSError, ValueError) as e:
            messagebox.showerror("Error", f"Failed to export report:\n{e}")
            return
        self._log(f"REPORT records={self.book.count} out={written}")
        messagebox.showinfo("Export", f"Report exported successfully!\n\n{written}")


if __name__ == '__main__':
    root = tk.Tk()
    app = PDFTableRecognizerApp(root)

    def on_closing():
        app._close_pdf_handle()
        root.destroy()

    root.protocol("WM_DELETE_WINDOW", on_closing)
    root.mainloop()
