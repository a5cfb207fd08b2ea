"""Assigned names and types of well-known GATT services, attributes and descriptors."""

from __future__ import annotations

from typing import NamedTuple


class KnownEntry(NamedTuple):
    """Specification name and type identifier of an assigned UUID."""

    name: str
    type: str


KNOWN_SERVICES = {
    "1800": KnownEntry("Generic Access", "org.bluetooth.service.generic_access"),
    "1801": KnownEntry("Generic Attribute", "org.bluetooth.service.generic_attribute"),
    "1802": KnownEntry("Immediate Alert", "org.bluetooth.service.immediate_alert"),
    "1803": KnownEntry("Link Loss", "org.bluetooth.service.link_loss"),
    "1804": KnownEntry("Tx Power", "org.bluetooth.service.tx_power"),
    "1805": KnownEntry("Current Time Service", "org.bluetooth.service.current_time"),
    "1806": KnownEntry("Reference Time Update Service", "org.bluetooth.service.reference_time_update"),
    "1807": KnownEntry("Next DST Change Service", "org.bluetooth.service.next_dst_change"),
    "1808": KnownEntry("Glucose", "org.bluetooth.service.glucose"),
    "1809": KnownEntry("Health Thermometer", "org.bluetooth.service.health_thermometer"),
    "180a": KnownEntry("Device Information", "org.bluetooth.service.device_information"),
    "180d": KnownEntry("Heart Rate", "org.bluetooth.service.heart_rate"),
    "180e": KnownEntry("Phone Alert Status Service", "org.bluetooth.service.phone_alert_service"),
    "180f": KnownEntry("Battery Service", "org.bluetooth.service.battery_service"),
    "1810": KnownEntry("Blood Pressure", "org.bluetooth.service.blood_pressuer"),
    "1811": KnownEntry("Alert Notification Service", "org.bluetooth.service.alert_notification"),
    "1812": KnownEntry("Human Interface Device", "org.bluetooth.service.human_interface_device"),
    "1813": KnownEntry("Scan Parameters", "org.bluetooth.service.scan_parameters"),
    "1814": KnownEntry("Running Speed and Cadence", "org.bluetooth.service.running_speed_and_cadence"),
    "1815": KnownEntry("Cycling Speed and Cadence", "org.bluetooth.service.cycling_speed_and_cadence"),
}

KNOWN_ATTRIBUTES = {
    "2800": KnownEntry("Primary Service", "org.bluetooth.attribute.gatt.primary_service_declaration"),
    "2801": KnownEntry("Secondary Service", "org.bluetooth.attribute.gatt.secondary_service_declaration"),
    "2802": KnownEntry("Include", "org.bluetooth.attribute.gatt.include_declaration"),
    "2803": KnownEntry("Characteristic", "org.bluetooth.attribute.gatt.characteristic_declaration"),
}

KNOWN_DESCRIPTORS = {
    "2900": KnownEntry(
        "Characteristic Extended Properties",
        "org.bluetooth.descriptor.gatt.characteristic_extended_properties",
    ),
    "2901": KnownEntry(
        "Characteristic User Description",
        "org.bluetooth.descriptor.gatt.characteristic_user_description",
    ),
    "2902": KnownEntry(
        "Client Characteristic Configuration",
        "org.bluetooth.descriptor.gatt.client_characteristic_configuration",
    ),
    "2903": KnownEntry(
        "Server Characteristic Configuration",
        "org.bluetooth.descriptor.gatt.server_characteristic_configuration",
    ),
    "2904": KnownEntry(
        "Characteristic Presentation Format",
        "org.bluetooth.descriptor.gatt.characteristic_presentation_format",
    ),
    "2905": KnownEntry(
        "Characteristic Aggregate Format",
        "org.bluetooth.descriptor.gatt.characteristic_aggregate_format",
    ),
    "2906": KnownEntry("Valid Range", "org.bluetooth.descriptor.valid_range"),
    "2907": KnownEntry("External Report Reference", "org.bluetooth.descriptor.external_report_reference"),
    "2908": KnownEntry("Report Reference", "org.bluetooth.descriptor.report_reference"),
}

_C = "org.bluetooth.characteristic."

KNOWN_CHARACTERISTICS = {
    "2a00": KnownEntry("Device Name", _C + "gap.device_name"),
    "2a01": KnownEntry("Appearance", _C + "gap.appearance"),
    "2a02": KnownEntry("Peripheral Privacy Flag", _C + "gap.peripheral_privacy_flag"),
    "2a03": KnownEntry("Reconnection Address", _C + "gap.reconnection_address"),
    "2a04": KnownEntry(
        "Peripheral Preferred Connection Parameters",
        _C + "gap.peripheral_preferred_connection_parameters",
    ),
    "2a05": KnownEntry("Service Changed", _C + "gatt.service_changed"),
    "2a06": KnownEntry("Alert Level", _C + "alert_level"),
    "2a07": KnownEntry("Tx Power Level", _C + "tx_power_level"),
    "2a08": KnownEntry("Date Time", _C + "date_time"),
    "2a09": KnownEntry("Day of Week", _C + "day_of_week"),
    "2a0a": KnownEntry("Day Date Time", _C + "day_date_time"),
    "2a0c": KnownEntry("Exact Time 256", _C + "exact_time_256"),
    "2a0d": KnownEntry("DST Offset", _C + "dst_offset"),
    "2a0e": KnownEntry("Time Zone", _C + "time_zone"),
    "2a0f": KnownEntry("Local Time Information", _C + "local_time_information"),
    "2a11": KnownEntry("Time with DST", _C + "time_with_dst"),
    "2a12": KnownEntry("Time Accuracy", _C + "time_accuracy"),
    "2a13": KnownEntry("Time Source", _C + "time_source"),
    "2a14": KnownEntry("Reference Time Information", _C + "reference_time_information"),
    "2a16": KnownEntry("Time Update Control Point", _C + "time_update_control_point"),
    "2a17": KnownEntry("Time Update State", _C + "time_update_state"),
    "2a18": KnownEntry("Glucose Measurement", _C + "glucose_measurement"),
    "2a19": KnownEntry("Battery Level", _C + "battery_level"),
    "2a1c": KnownEntry("Temperature Measurement", _C + "temperature_measurement"),
    "2a1d": KnownEntry("Temperature Type", _C + "temperature_type"),
    "2a1e": KnownEntry("Intermediate Temperature", _C + "intermediate_temperature"),
    "2a21": KnownEntry("Measurement Interval", _C + "measurement_interval"),
    "2a22": KnownEntry("Boot Keyboard Input Report", _C + "boot_keyboard_input_report"),
    "2a23": KnownEntry("System ID", _C + "system_id"),
    "2a24": KnownEntry("Model Number String", _C + "model_number_string"),
    "2a25": KnownEntry("Serial Number String", _C + "serial_number_string"),
    "2a26": KnownEntry("Firmware Revision String", _C + "firmware_revision_string"),
    "2a27": KnownEntry("Hardware Revision String", _C + "hardware_revision_string"),
    "2a28": KnownEntry("Software Revision String", _C + "software_revision_string"),
    "2a29": KnownEntry("Manufacturer Name String", _C + "manufacturer_name_string"),
    "2a2a": KnownEntry(
        "IEEE 11073-20601 Regulatory Certification Data List",
        _C + "ieee_11073-20601_regulatory_certification_data_list",
    ),
    "2a2b": KnownEntry("Current Time", _C + "current_time"),
    "2a31": KnownEntry("Scan Refresh", _C + "scan_refresh"),
    "2a32": KnownEntry("Boot Keyboard Output Report", _C + "boot_keyboard_output_report"),
    "2a33": KnownEntry("Boot Mouse Input Report", _C + "boot_mouse_input_report"),
    "2a34": KnownEntry("Glucose Measurement Context", _C + "glucose_measurement_context"),
    "2a35": KnownEntry("Blood Pressure Measurement", _C + "blood_pressure_measurement"),
    "2a36": KnownEntry("Intermediate Cuff Pressure", _C + "intermediate_blood_pressure"),
    "2a37": KnownEntry("Heart Rate Measurement", _C + "heart_rate_measurement"),
    "2a38": KnownEntry("Body Sensor Location", _C + "body_sensor_location"),
    "2a39": KnownEntry("Heart Rate Control Point", _C + "heart_rate_control_point"),
    "2a3f": KnownEntry("Alert Status", _C + "alert_status"),
    "2a40": KnownEntry("Ringer Control Point", _C + "ringer_control_point"),
    "2a41": KnownEntry("Ringer Setting", _C + "ringer_setting"),
    "2a42": KnownEntry("Alert Category ID Bit Mask", _C + "alert_category_id_bit_mask"),
    "2a43": KnownEntry("Alert Category ID", _C + "alert_category_id"),
    "2a44": KnownEntry("Alert Notification Control Point", _C + "alert_notification_control_point"),
    "2a45": KnownEntry("Unread Alert Status", _C + "unread_alert_status"),
    "2a46": KnownEntry("New Alert", _C + "new_alert"),
    "2a47": KnownEntry("Supported New Alert Category", _C + "supported_new_alert_category"),
    "2a48": KnownEntry("Supported Unread Alert Category", _C + "supported_unread_alert_category"),
    "2a49": KnownEntry("Blood Pressure Feature", _C + "blood_pressure_feature"),
    "2a4a": KnownEntry("HID Information", _C + "hid_information"),
    "2a4b": KnownEntry("Report Map", _C + "report_map"),
    "2a4c": KnownEntry("HID Control Point", _C + "hid_control_point"),
    "2a4d": KnownEntry("Report", _C + "report"),
    "2a4e": KnownEntry("Protocol Mode", _C + "protocol_mode"),
    "2a4f": KnownEntry("Scan Interval Window", _C + "scan_interval_window"),
    "2a50": KnownEntry("PnP ID", _C + "pnp_id"),
    "2a51": KnownEntry("Glucose Feature", _C + "glucose_feature"),
    "2a52": KnownEntry("Record Access Control Point", _C + "record_access_control_point"),
    "2a53": KnownEntry("RSC Measurement", _C + "rsc_measurement"),
    "2a54": KnownEntry("RSC Feature", _C + "rsc_feature"),
    "2a55": KnownEntry("SC Control Point", _C + "sc_control_point"),
    "2a5b": KnownEntry("CSC Measurement", _C + "csc_measurement"),
    "2a5c": KnownEntry("CSC Feature", _C + "csc_feature"),
    "2a5d": KnownEntry("Sensor Location", _C + "sensor_location"),
}


def _lookup(table, uuid) -> str:
    entry = table.get(str(uuid))
    return entry.name if entry is not None else ""


def service_name(uuid) -> str:
    """Return the specification name of a service UUID, or "" if unassigned."""
    return _lookup(KNOWN_SERVICES, uuid)


def characteristic_name(uuid) -> str:
    """Return the specification name of a characteristic UUID, or "" if unassigned."""
    return _lookup(KNOWN_CHARACTERISTICS, uuid)


def descriptor_name(uuid) -> str:
    """Return the specification name of a descriptor UUID, or "" if unassigned."""
    return _lookup(KNOWN_DESCRIPTORS, uuid)


def attribute_name(uuid) -> str:
    """Return the specification name of an attribute type UUID, or "" if unassigned."""
    return _lookup(KNOWN_ATTRIBUTES, uuid)