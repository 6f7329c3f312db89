"""Static CEC symbol tables: logical addresses, opcodes, key codes and vendors."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

BROADCAST = 15
UNREGISTERED = BROADCAST
ADDRESS_COUNT = 16

# Reserved opcode used when a frame carries no opcode (a poll).
NO_OPCODE = 0xFD
USER_CONTROL_PRESSED = 0x44
USER_CONTROL_RELEASE = 0x45

LOGICAL_NAMES: tuple[str, ...] = (
    "TV",
    "Recording",
    "Recording2",
    "Tuner",
    "Playback",
    "Audio",
    "Tuner2",
    "Tuner3",
    "Playback2",
    "Recording3",
    "Tuner4",
    "Playback3",
    "Reserved",
    "Reserved2",
    "Free",
    "Broadcast",
)

OPCODES: Mapping[int, str] = MappingProxyType(
    {
        0x00: "FEATURE_ABORT",
        0x04: "IMAGE_VIEW_ON",
        0x05: "TUNER_STEP_INCREMENT",
        0x06: "TUNER_STEP_DECREMENT",
        0x07: "TUNER_DEVICE_STATUS",
        0x08: "GIVE_TUNER_DEVICE_STATUS",
        0x09: "RECORD_ON",
        0x0A: "RECORD_STATUS",
        0x0B: "RECORD_OFF",
        0x0D: "TEXT_VIEW_ON",
        0x0F: "RECORD_TV_SCREEN",
        0x1A: "GIVE_DECK_STATUS",
        0x1B: "DECK_STATUS",
        0x32: "SET_MENU_LANGUAGE",
        0x33: "CLEAR_ANALOGUE_TIMER",
        0x34: "SET_ANALOGUE_TIMER",
        0x35: "TIMER_STATUS",
        0x36: "STANDBY",
        0x41: "PLAY",
        0x42: "DECK_CONTROL",
        0x43: "TIMER_CLEARED_STATUS",
        0x44: "USER_CONTROL_PRESSED",
        0x45: "USER_CONTROL_RELEASE",
        0x46: "GIVE_OSD_NAME",
        0x47: "SET_OSD_NAME",
        0x64: "SET_OSD_STRING",
        0x67: "SET_TIMER_PROGRAM_TITLE",
        0x70: "SYSTEM_AUDIO_MODE_REQUEST",
        0x71: "GIVE_AUDIO_STATUS",
        0x72: "SET_SYSTEM_AUDIO_MODE",
        0x7A: "REPORT_AUDIO_STATUS",
        0x7D: "GIVE_SYSTEM_AUDIO_MODE_STATUS",
        0x7E: "SYSTEM_AUDIO_MODE_STATUS",
        0x80: "ROUTING_CHANGE",
        0x81: "ROUTING_INFORMATION",
        0x82: "ACTIVE_SOURCE",
        0x83: "GIVE_PHYSICAL_ADDRESS",
        0x84: "REPORT_PHYSICAL_ADDRESS",
        0x85: "REQUEST_ACTIVE_SOURCE",
        0x86: "SET_STREAM_PATH",
        0x87: "DEVICE_VENDOR_ID",
        0x89: "VENDOR_COMMAND",
        0x8A: "VENDOR_REMOTE_BUTTON_DOWN",
        0x8B: "VENDOR_REMOTE_BUTTON_UP",
        0x8C: "GIVE_DEVICE_VENDOR_ID",
        0x8D: "MENU_REQUEST",
        0x8E: "MENU_STATUS",
        0x8F: "GIVE_DEVICE_POWER_STATUS",
        0x90: "REPORT_POWER_STATUS",
        0x91: "GET_MENU_LANGUAGE",
        0x92: "SELECT_ANALOGUE_SERVICE",
        0x93: "SELECT_DIGITAL_SERVICE",
        0x97: "SET_DIGITAL_TIMER",
        0x99: "CLEAR_DIGITAL_TIMER",
        0x9A: "SET_AUDIO_RATE",
        0x9D: "INACTIVE_SOURCE",
        0x9E: "CEC_VERSION",
        0x9F: "GET_CEC_VERSION",
        0xA0: "VENDOR_COMMAND_WITH_ID",
        0xA1: "CLEAR_EXTERNAL_TIMER",
        0xA2: "SET_EXTERNAL_TIMER",
        # CEC 1.4
        0xC0: "START_ARC",
        0xC1: "REPORT_ARC_STARTED",
        0xC2: "REPORT_ARC_ENDED",
        0xC3: "REQUEST_ARC_START",
        0xC4: "REQUEST_ARC_END",
        0xC5: "END_ARC",
        0xF8: "CDC",
        NO_OPCODE: "NONE",
        0xFF: "ABORT",
    }
)

# 0x43 and 0x65 are both "Mute"; name lookups return the lower code.
KEY_CODES: Mapping[int, str] = MappingProxyType(
    {
        0x00: "Select",
        0x01: "Up",
        0x02: "Down",
        0x03: "Left",
        0x04: "Right",
        0x05: "RightUp",
        0x06: "RightDown",
        0x07: "LeftUp",
        0x08: "LeftDown",
        0x09: "RootMenu",
        0x0A: "SetupMenu",
        0x0B: "ContentsMenu",
        0x0C: "FavoriteMenu",
        0x0D: "Exit",
        0x20: "0",
        0x21: "1",
        0x22: "2",
        0x23: "3",
        0x24: "4",
        0x25: "5",
        0x26: "6",
        0x27: "7",
        0x28: "8",
        0x29: "9",
        0x2A: "Dot",
        0x2B: "Enter",
        0x2C: "Clear",
        0x2F: "NextFavorite",
        0x30: "ChannelUp",
        0x31: "ChannelDown",
        0x32: "PreviousChannel",
        0x33: "SoundSelect",
        0x34: "InputSelect",
        0x35: "DisplayInformation",
        0x36: "Help",
        0x37: "PageUp",
        0x38: "PageDown",
        0x40: "Power",
        0x41: "VolumeUp",
        0x42: "VolumeDown",
        0x43: "Mute",
        0x44: "Play",
        0x45: "Stop",
        0x46: "Pause",
        0x47: "Record",
        0x48: "Rewind",
        0x49: "FastForward",
        0x4A: "Eject",
        0x4B: "Forward",
        0x4C: "Backward",
        0x4D: "StopRecord",
        0x4E: "PauseRecord",
        0x50: "Angle",
        0x51: "SubPicture",
        0x52: "VideoOnDemand",
        0x53: "ElectronicProgramGuide",
        0x54: "TimerProgramming",
        0x55: "InitialConfiguration",
        0x60: "PlayFunction",
        0x61: "PausePlay",
        0x62: "RecordFunction",
        0x63: "PauseRecordFunction",
        0x64: "StopFunction",
        0x65: "Mute",
        0x66: "RestoreVolume",
        0x67: "Tune",
        0x68: "SelectMedia",
        0x69: "SelectAvInput",
        0x6A: "SelectAudioInput",
        0x6B: "PowerToggle",
        0x6C: "PowerOff",
        0x6D: "PowerOn",
        0x71: "Blue",
        0x72: "Red",
        0x73: "Green",
        0x74: "Yellow",
        0x75: "F5",
        0x76: "Data",
        0x91: "AnReturn",
        0x96: "Max",
    }
)

VENDORS: Mapping[int, str] = MappingProxyType(
    {
        0x000039: "Toshiba",
        0x0000F0: "Samsung",
        0x0005CD: "Denon",
        0x000678: "Marantz",
        0x000982: "Loewe",
        0x0009B0: "Onkyo",
        0x000CB8: "Medion",
        0x000CE7: "Toshiba",
        0x001582: "Pulse Eight",
        0x0020C7: "Akai",
        0x002467: "Aoc",
        0x008045: "Panasonic",
        0x00903E: "Philips",
        0x009053: "Daewoo",
        0x00A0DE: "Yamaha",
        0x00D0D5: "Grundig",
        0x00E036: "Pioneer",
        0x00E091: "LG",
        0x08001F: "Sharp",
        0x080046: "Sony",
        0x18C086: "Broadcom",
        0x6B746D: "Vizio",
        0x8065E9: "Benq",
        0x9C645E: "Harman Kardon",
    }
)


def opcode_name(opcode: int) -> str:
    return OPCODES.get(opcode, "")


def key_name(code: int) -> str:
    return KEY_CODES.get(code, "")


def vendor_name(vendor_id: int) -> str:
    return VENDORS.get(vendor_id, "")
