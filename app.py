# 19.10.26

import sys
import asyncio
import logging
import signal
import qasync

from PyQt5 import QtWidgets, QtCore, QtGui

from Presence.config import Configuration, Weekday
from Presence.const import (ACTIVITIES, AVAILABILITIES, HOURS_PASSED_KEEP, HOURS_PASSED_STATUSES,
                            HTTP_METHODS, PANEL_FLAGS)
from Presence.diagnostics import DiagnosticsClient
from Presence.lights import CustomApiLight, LightController
from Presence.settings import SettingsService
from Presence.util import (checks_from_working_days, format_time_of_day, panel_visibility,
                           working_days_from_checks)
from Presence.working_hours import hours_passed_action, is_in_working_hours, parse_time_of_day


logger = logging.getLogger(__name__)


class MainWindow(QtWidgets.QMainWindow):
    """Presence light settings pane"""
    def __init__(self, settings_service, diagnostics, light_controllers=None):
        super().__init__()
        self.settings_service = settings_service
        self.diagnostics = diagnostics
        self.light_controllers = light_controllers or []
        self.config = Configuration()
        self.is_working_hours = False
        self.populating = False
        # Time editors the user has changed since the last load
        self.edited_times = set()

        self.panels = {}
        self.day_checks = {}
        self.hours_passed_radios = {}
        self.custom_method_combos = {}
        self.custom_uri_edits = {}

        self.init_ui()

    def init_ui(self):
        """Initialize the user interface"""
        self.setWindowTitle("PresenceLight Settings")
        self.setMinimumSize(1000, 700)

        central_widget = QtWidgets.QWidget()
        self.setCentralWidget(central_widget)

        main_layout = QtWidgets.QHBoxLayout()
        main_layout.addLayout(self.create_general_panel(), 40)
        main_layout.addLayout(self.create_integrations_panel(), 60)
        central_widget.setLayout(main_layout)

    def create_button(self, text, accent=None):
        """Flat button; `accent` colors the primary actions"""
        btn = QtWidgets.QPushButton(text)
        background = accent or "#2f3440"
        btn.setStyleSheet(f"""
            QPushButton {{
                background-color: {background};
                color: #f5f5f5;
                border: 1px solid #454b58;
                padding: 8px 16px;
                border-radius: 4px;
            }}
            QPushButton:disabled {{
                background-color: #23262d;
                color: #6b7080;
            }}
        """)
        return btn

    def create_panel(self, name, layout):
        """Wrap a layout in a widget whose visibility follows a config flag"""
        panel = QtWidgets.QWidget()
        panel.setLayout(layout)
        self.panels[name] = panel
        return panel

    def create_general_panel(self):
        """Icon style, sync, brightness and working hours"""
        panel = QtWidgets.QVBoxLayout()
        panel.setContentsMargins(10, 10, 10, 10)
        panel.setSpacing(15)

        icon_box = QtWidgets.QGroupBox("Icon Style")
        icon_layout = QtWidgets.QHBoxLayout()
        self.white_radio = QtWidgets.QRadioButton("White")
        self.transparent_radio = QtWidgets.QRadioButton("Transparent")
        icon_layout.addWidget(self.white_radio)
        icon_layout.addWidget(self.transparent_radio)
        icon_box.setLayout(icon_layout)
        panel.addWidget(icon_box)

        self.sync_lights_checkbox = QtWidgets.QCheckBox("Sync lights with presence")
        self.turn_on_button = self.create_button("Turn Lights On")
        self.turn_off_button = self.create_button("Turn Lights Off")
        self.sync_lights_checkbox.stateChanged.connect(self.toggle_sync_lights)
        self.turn_on_button.clicked.connect(lambda: self.set_sync_lights(True))
        self.turn_off_button.clicked.connect(lambda: self.set_sync_lights(False))
        panel.addWidget(self.sync_lights_checkbox)
        panel.addWidget(self.turn_on_button)
        panel.addWidget(self.turn_off_button)

        self.default_brightness_checkbox = QtWidgets.QCheckBox("Use default brightness")
        self.default_brightness_checkbox.stateChanged.connect(self.toggle_default_brightness)
        brightness_layout = QtWidgets.QVBoxLayout()
        self.brightness_slider = self.create_slider()
        brightness_layout.addWidget(self.brightness_slider)
        panel.addWidget(self.default_brightness_checkbox)
        panel.addWidget(self.create_panel("default_brightness", brightness_layout))

        self.working_hours_checkbox = QtWidgets.QCheckBox("Use working hours")
        self.working_hours_checkbox.stateChanged.connect(self.toggle_working_hours)
        panel.addWidget(self.working_hours_checkbox)
        panel.addWidget(self.create_working_hours_panel())

        self.save_button = self.create_button("Save Settings", accent="#388e3c")
        self.save_button.clicked.connect(self.handle_save)
        self.saved_label = QtWidgets.QLabel("Settings saved")
        self.saved_label.setVisible(False)
        panel.addStretch()
        panel.addWidget(self.save_button)
        panel.addWidget(self.saved_label)

        return panel

    def create_working_hours_panel(self):
        layout = QtWidgets.QVBoxLayout()

        times = QtWidgets.QFormLayout()
        self.start_time_edit = QtWidgets.QTimeEdit()
        self.end_time_edit = QtWidgets.QTimeEdit()
        self.time_edits = {
            "working_hours_start_time": self.start_time_edit,
            "working_hours_end_time": self.end_time_edit
        }
        for field_name, edit in self.time_edits.items():
            edit.setDisplayFormat("HH:mm")
            edit.timeChanged.connect(lambda value, f=field_name: self.time_changed(f))
        times.addRow("Start", self.start_time_edit)
        times.addRow("End", self.end_time_edit)
        layout.addLayout(times)

        days = QtWidgets.QHBoxLayout()
        for day in Weekday:
            check = QtWidgets.QCheckBox(day.value[:3])
            self.day_checks[day] = check
            days.addWidget(check)
        layout.addLayout(days)

        layout.addWidget(QtWidgets.QLabel("When working hours have passed:"))
        statuses = QtWidgets.QHBoxLayout()
        for status in HOURS_PASSED_STATUSES:
            radio = QtWidgets.QRadioButton(status)
            self.hours_passed_radios[status] = radio
            statuses.addWidget(radio)
        layout.addLayout(statuses)

        return self.create_panel("working_hours", layout)

    def create_integrations_panel(self):
        """One enable checkbox plus a collapsible panel per light integration"""
        panel = QtWidgets.QVBoxLayout()
        panel.setContentsMargins(20, 10, 20, 10)
        panel.setSpacing(10)

        self.integration_checks = {}

        hue_layout = QtWidgets.QFormLayout()
        self.hue_ip_edit = QtWidgets.QLineEdit()
        self.hue_key_edit = QtWidgets.QLineEdit()
        self.hue_light_edit = QtWidgets.QLineEdit()
        hue_layout.addRow("Bridge IP", self.hue_ip_edit)
        hue_layout.addRow("API Key", self.hue_key_edit)
        hue_layout.addRow("Light", self.hue_light_edit)
        self.add_integration(panel, "hue", "Philips Hue", hue_layout)

        yeelight_layout = QtWidgets.QFormLayout()
        self.yeelight_edit = QtWidgets.QLineEdit()
        yeelight_layout.addRow("Light", self.yeelight_edit)
        self.add_integration(panel, "yeelight", "Yeelight", yeelight_layout)

        lifx_layout = QtWidgets.QFormLayout()
        self.lifx_client_id_edit = QtWidgets.QLineEdit()
        self.lifx_secret_edit = QtWidgets.QLineEdit()
        self.lifx_secret_edit.setEchoMode(QtWidgets.QLineEdit.Password)
        self.lifx_api_key_edit = QtWidgets.QLineEdit()
        self.lifx_item_edit = QtWidgets.QLineEdit()
        lifx_layout.addRow("Client Id", self.lifx_client_id_edit)
        lifx_layout.addRow("Client Secret", self.lifx_secret_edit)
        lifx_layout.addRow("API Key", self.lifx_api_key_edit)
        lifx_layout.addRow("Light", self.lifx_item_edit)
        self.add_integration(panel, "lifx", "LIFX", lifx_layout)

        self.get_token_link = QtWidgets.QLabel('<a href="https://cloud.lifx.com/settings">Get LIFX token</a>')
        self.get_token_link.setOpenExternalLinks(True)
        self.panels["lifx_token_link"] = self.get_token_link
        panel.addWidget(self.get_token_link)

        custom_layout = QtWidgets.QFormLayout()
        for label, prefix in list(AVAILABILITIES.items()) + [(f"Activity {k}", v) for k, v in ACTIVITIES.items()]:
            row = QtWidgets.QHBoxLayout()
            combo = QtWidgets.QComboBox()
            combo.addItems([""] + HTTP_METHODS)
            uri = QtWidgets.QLineEdit()
            self.custom_method_combos[prefix] = combo
            self.custom_uri_edits[prefix] = uri
            row.addWidget(combo)
            row.addWidget(uri)
            custom_layout.addRow(label, row)
        scroll = QtWidgets.QScrollArea()
        scroll.setWidgetResizable(True)
        inner = QtWidgets.QWidget()
        inner.setLayout(custom_layout)
        scroll.setWidget(inner)
        custom_wrapper = QtWidgets.QVBoxLayout()
        custom_wrapper.addWidget(scroll)
        self.add_integration(panel, "custom_api", "Custom API", custom_wrapper)

        panel.addStretch()
        return panel

    def add_integration(self, parent, name, title, layout):
        check = QtWidgets.QCheckBox(f"Enable {title}")
        check.stateChanged.connect(lambda state, n=name: self.toggle_panel_flag(n, state))
        self.integration_checks[name] = check
        parent.addWidget(check)
        parent.addWidget(self.create_panel(name, layout))

    def create_slider(self):
        """Default brightness slider, 0-100 percent in steps of 5"""
        slider = QtWidgets.QSlider(QtCore.Qt.Horizontal)
        slider.setRange(0, 100)
        slider.setSingleStep(5)
        slider.setPageStep(10)
        slider.setTickInterval(10)
        slider.setTickPosition(QtWidgets.QSlider.TicksBelow)
        slider.valueChanged.connect(lambda value: slider.setToolTip(f"{value}%"))
        return slider

    async def load_settings(self):
        """Load (or create) settings and initialize UI state"""
        self.config = await self.settings_service.load_or_create(Configuration())
        self.apply_config()
        light_settings = self.config.light_settings
        if light_settings.use_working_hours:
            self.is_working_hours = is_in_working_hours(
                light_settings.working_hours_start_time,
                light_settings.working_hours_end_time,
                light_settings.working_days)

    def apply_config(self):
        """Populate every widget from self.config"""
        self.populating = True
        self.edited_times.clear()
        try:
            config = self.config
            light_settings = config.light_settings

            self.transparent_radio.setChecked(config.icon_type == "Transparent")
            self.white_radio.setChecked(config.icon_type != "Transparent")

            self.sync_lights_checkbox.setChecked(light_settings.sync_lights)
            self.update_sync_buttons()
            self.default_brightness_checkbox.setChecked(light_settings.use_default_brightness)
            self.brightness_slider.setValue(light_settings.default_brightness)

            self.working_hours_checkbox.setChecked(light_settings.use_working_hours)
            for field_name, edit in self.time_edits.items():
                if (value := parse_time_of_day(getattr(light_settings, field_name))) is not None:
                    edit.setTime(QtCore.QTime(value.hour, value.minute, value.second))
            for day, checked in checks_from_working_days(light_settings.working_days).items():
                self.day_checks[day].setChecked(checked)
            status = light_settings.hours_passed_status
            self.hours_passed_radios.get(status, self.hours_passed_radios[HOURS_PASSED_KEEP]).setChecked(True)

            visibility = panel_visibility(config)
            for name, check in self.integration_checks.items():
                check.setChecked(visibility[name])

            hue = light_settings.hue
            self.hue_ip_edit.setText(hue.hue_ip_address)
            self.hue_key_edit.setText(hue.hue_api_key)
            self.hue_light_edit.setText(hue.selected_hue_light_id)
            self.yeelight_edit.setText(light_settings.yeelight.selected_yeelight_id)
            lifx = light_settings.lifx
            self.lifx_client_id_edit.setText(lifx.lifx_client_id)
            self.lifx_secret_edit.setText(lifx.lifx_client_secret)
            self.lifx_api_key_edit.setText(lifx.lifx_api_key)
            self.lifx_item_edit.setText(lifx.selected_lifx_item_id)

            custom = light_settings.custom
            for prefix, combo in self.custom_method_combos.items():
                index = combo.findText(getattr(custom, f"{prefix}_method").upper())
                combo.setCurrentIndex(max(index, 0))
                self.custom_uri_edits[prefix].setText(getattr(custom, f"{prefix}_uri"))
        finally:
            self.populating = False

        self.sync_panels()

    def collect_config(self):
        """Write UI-only state back into the canonical configuration fields"""
        config = self.config
        light_settings = config.light_settings

        config.icon_type = "Transparent" if self.transparent_radio.isChecked() else "White"
        for status, radio in self.hours_passed_radios.items():
            if radio.isChecked():
                light_settings.hours_passed_status = status
        light_settings.default_brightness = int(self.brightness_slider.value())
        light_settings.working_days = working_days_from_checks(
            {day: check.isChecked() for day, check in self.day_checks.items()})

        light_settings.hue.hue_ip_address = self.hue_ip_edit.text()
        light_settings.hue.hue_api_key = self.hue_key_edit.text()
        light_settings.hue.selected_hue_light_id = self.hue_light_edit.text()
        light_settings.yeelight.selected_yeelight_id = self.yeelight_edit.text()
        light_settings.lifx.lifx_client_id = self.lifx_client_id_edit.text()
        light_settings.lifx.lifx_client_secret = self.lifx_secret_edit.text()
        light_settings.lifx.lifx_api_key = self.lifx_api_key_edit.text()
        light_settings.lifx.selected_lifx_item_id = self.lifx_item_edit.text()
        for prefix, combo in self.custom_method_combos.items():
            setattr(light_settings.custom, f"{prefix}_method", combo.currentText())
            setattr(light_settings.custom, f"{prefix}_uri", self.custom_uri_edits[prefix].text())
        return config

    def sync_panels(self):
        """Show or collapse each panel according to its flag"""
        for name, visible in panel_visibility(self.config).items():
            if name in self.panels:
                self.panels[name].setVisible(visible)

    def toggle_panel_flag(self, name, state):
        """Mirror an integration checkbox into the configuration"""
        if self.populating:
            return
        owner_path, attr = PANEL_FLAGS[name].rsplit(".", 1)
        owner = self.config
        for part in owner_path.split("."):
            owner = getattr(owner, part)
        setattr(owner, attr, bool(state))
        self.sync_panels()

    def toggle_working_hours(self, state):
        """Toggle working hours, normalizing the stored times"""
        if self.populating:
            return
        self.config.light_settings.use_working_hours = bool(state)
        self.write_times()
        self.sync_panels()

    def time_changed(self, field_name):
        if self.populating:
            return
        self.edited_times.add(field_name)
        self.write_times()

    def write_times(self):
        """Store edited times; unset times stay empty, set ones are normalized"""
        light_settings = self.config.light_settings
        for field_name, edit in self.time_edits.items():
            if field_name in self.edited_times:
                value = edit.time().toPyTime()
            else:
                value = parse_time_of_day(getattr(light_settings, field_name))
            setattr(light_settings, field_name, format_time_of_day(value))

    def toggle_default_brightness(self, state):
        if self.populating:
            return
        self.config.light_settings.use_default_brightness = bool(state)
        self.sync_panels()
        asyncio.ensure_future(self.save_settings_async())

    def toggle_sync_lights(self, state):
        """Turn the lights off when syncing is disabled, then persist"""
        if self.populating:
            return
        self.config.light_settings.sync_lights = bool(state)
        asyncio.ensure_future(self.sync_lights_changed_async())

    def set_sync_lights(self, enabled):
        self.sync_lights_checkbox.setChecked(enabled)

    async def sync_lights_changed_async(self):
        if not self.config.light_settings.sync_lights:
            await self.apply_color("Off")
        self.update_sync_buttons()
        self.sync_panels()
        await self.settings_service.save(self.config)

    def update_sync_buttons(self):
        syncing = self.config.light_settings.sync_lights
        self.turn_off_button.setVisible(syncing)
        self.turn_on_button.setVisible(not syncing)

    def handle_save(self):
        """Handle save button click"""
        asyncio.ensure_future(self.save_settings_async())

    async def save_settings_async(self):
        self.save_button.setEnabled(False)
        try:
            self.collect_config()
            self.sync_panels()
            saved = await self.settings_service.save(self.config)
            self.saved_label.setText("Settings saved" if saved else "Settings could not be saved")
            self.saved_label.setVisible(True)
        finally:
            self.save_button.setEnabled(True)

    async def set_color(self, color, activity=None):
        """Apply a presence color, honoring the hours-passed behavior"""
        light_settings = self.config.light_settings
        if not light_settings.sync_lights:
            return
        if light_settings.use_working_hours:
            self.is_working_hours = is_in_working_hours(
                light_settings.working_hours_start_time,
                light_settings.working_hours_end_time,
                light_settings.working_days)
            action = hours_passed_action(light_settings, self.is_working_hours)
            if action == HOURS_PASSED_KEEP:
                return
            if action is not None:
                color, activity = action, None
        await self.apply_color(color, activity)

    async def apply_color(self, color, activity=None):
        """Send a color to every enabled light controller"""
        for controller in self.light_controllers:
            if not controller.is_enabled(self.config):
                continue
            try:
                await controller.set_color(self.config, color, activity)
            except Exception as e:
                logger.error("Light %s failed: %s", controller.name, e)
                self.diagnostics.track_exception(e)


def apply_dark_theme(app):
    """Dark theme for the settings form"""
    app.setStyle("Fusion")
    palette = QtGui.QPalette()
    palette.setColor(QtGui.QPalette.Window, QtGui.QColor(28, 30, 36))
    palette.setColor(QtGui.QPalette.WindowText, QtGui.QColor(230, 230, 230))
    palette.setColor(QtGui.QPalette.Base, QtGui.QColor(20, 22, 27))
    palette.setColor(QtGui.QPalette.Text, QtGui.QColor(230, 230, 230))
    palette.setColor(QtGui.QPalette.Highlight, QtGui.QColor(76, 175, 80))
    app.setPalette(palette)
    app.setStyleSheet("""
        QGroupBox {
            border: 1px solid #3a3f4b;
            border-radius: 4px;
            margin-top: 14px;
            padding-top: 8px;
        }
        QCheckBox {
            font-weight: bold;
        }
        QLineEdit, QComboBox, QTimeEdit {
            background-color: #1d2027;
            border: 1px solid #3a3f4b;
            border-radius: 3px;
            padding: 4px 6px;
            min-height: 20px;
        }
        QLineEdit:focus, QComboBox:focus, QTimeEdit:focus {
            border-color: #4caf50;
        }
        QScrollArea {
            border: none;
        }
    """)


def main():
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    app = QtWidgets.QApplication(sys.argv)
    apply_dark_theme(app)

    # Handle Ctrl+C gracefully
    signal.signal(signal.SIGINT, lambda *args: app.quit())

    loop = qasync.QEventLoop(app)
    asyncio.set_event_loop(loop)

    diagnostics = DiagnosticsClient()
    window = MainWindow(
        SettingsService(diagnostics),
        diagnostics,
        [LightController(), CustomApiLight(diagnostics)]
    )
    window.show()

    with loop:
        loop.run_until_complete(window.load_settings())
        loop.run_forever()


if __name__ == "__main__":
    main()
