"""Wireless network name and signal strength over generic netlink (nl80211)."""

from __future__ import annotations

import functools
import socket
import struct
from typing import Callable, Optional

from tilebar.util import warn

NLMSG_HDRLEN = 16
GENL_HDRLEN = 4
NLA_HDRLEN = 4

NLM_F_REQUEST = 0x1
NLM_F_DUMP = 0x300
NLMSG_ERROR = 0x2
NLMSG_DONE = 0x3

NETLINK_GENERIC = 16
GENL_ID_CTRL = 0x10
CTRL_CMD_GETFAMILY = 3
CTRL_ATTR_FAMILY_ID = 1
CTRL_ATTR_FAMILY_NAME = 2

NL80211_CMD_GET_STATION = 17
NL80211_CMD_GET_INTERFACE = 5
NL80211_ATTR_IFINDEX = 3
NL80211_ATTR_STA_INFO = 21
NL80211_ATTR_SSID = 52
NL80211_STA_INFO_SIGNAL_AVG = 13

FAMILY_NAME = b"nl80211\x00"
RESPONSE_SIZE = 4096

_NLMSGHDR = struct.Struct("=IHHII")
_GENLHDR = struct.Struct("=BBH")
_NLATTR = struct.Struct("=HH")
_U16 = struct.Struct("=H")
_U32 = struct.Struct("=I")
_S8 = struct.Struct("=b")


def _align(length: int) -> int:
    return (length + 3) & ~3


def _attr(attr_type: int, payload: bytes) -> bytes:
    header = _NLATTR.pack(NLA_HDRLEN + len(payload), attr_type)
    padding = b"\x00" * (_align(len(payload)) - len(payload))
    return header + payload + padding


def find_attr(attr: int, data: bytes) -> Optional[bytes]:
    """Return the payload of the first netlink attribute of type ``attr`` in ``data``."""
    view = memoryview(data)
    offset = 0
    while offset + NLA_HDRLEN <= len(view):
        nla_len, nla_type = _NLATTR.unpack_from(view, offset)
        if nla_type == attr:
            return bytes(view[offset + NLA_HDRLEN:offset + max(nla_len, NLA_HDRLEN)])
        if nla_len < NLA_HDRLEN:
            break
        offset += _align(nla_len)
    return None


def rssi_to_perc(rssi: int) -> int:
    """Map a signal level in dBm onto 0..100."""
    if rssi >= -50:
        return 100
    if rssi <= -100:
        return 0
    return 2 * (rssi + 100)


class Nl80211:
    """A generic netlink connection for nl80211 interface and station queries."""

    def __init__(
        self,
        sock: Optional[socket.socket] = None,
        ifindex: Callable[[str], int] = socket.if_nametoindex,
    ) -> None:
        self._sock = sock
        self._ifindex = ifindex
        self._seq = 1
        self._family: Optional[int] = None

    def _socket(self):
        if self._sock is None:
            try:
                self._sock = socket.socket(socket.AF_NETLINK, socket.SOCK_RAW, NETLINK_GENERIC)
            except OSError as exc:
                warn(f"socket 'AF_NETLINK': {exc.strerror or exc}")
                return None
        return self._sock

    def _message(self, msg_type: int, flags: int, cmd: int, attr: bytes) -> bytes:
        body = _GENLHDR.pack(cmd, 1, 0) + attr
        header = _NLMSGHDR.pack(NLMSG_HDRLEN + len(body), msg_type, flags, self._seq, 0)
        self._seq += 1
        return header + body

    def _send(self, request: bytes) -> bool:
        sock = self._socket()
        if sock is None:
            return False
        try:
            sent = sock.send(request)
        except OSError as exc:
            warn(f"send 'AF_NETLINK': {exc.strerror or exc}")
            return False
        if sent != len(request):
            warn("send 'AF_NETLINK': short write")
            return False
        return True

    def _recv(self) -> Optional[bytes]:
        try:
            return self._sock.recv(RESPONSE_SIZE)
        except OSError as exc:
            warn(f"recv 'AF_NETLINK': {exc.strerror or exc}")
            return None

    def _index(self, interface: str) -> Optional[int]:
        try:
            return self._ifindex(interface)
        except OSError:
            warn(f"interface {interface} not found")
            return None

    def family_id(self) -> Optional[int]:
        """Return the numeric id of the nl80211 family, resolving it once."""
        if self._family:
            return self._family
        request = self._message(
            GENL_ID_CTRL,
            NLM_F_REQUEST,
            CTRL_CMD_GETFAMILY,
            _attr(CTRL_ATTR_FAMILY_NAME, FAMILY_NAME),
        )
        if not self._send(request):
            return None
        response = self._recv()
        if response is None or len(response) <= len(request):
            return None
        payload = find_attr(CTRL_ATTR_FAMILY_ID, response[len(request):])
        if payload is None or len(payload) != _U16.size:
            return None
        self._family = _U16.unpack(payload)[0] or None
        return self._family

    def essid(self, interface: str) -> Optional[str]:
        """Return the SSID that ``interface`` is associated with."""
        family = self.family_id()
        index = self._index(interface)
        if not family:
            warn("nl80211 family not found")
            return None
        if index is None:
            return None
        request = self._message(
            family,
            NLM_F_REQUEST,
            NL80211_CMD_GET_INTERFACE,
            _attr(NL80211_ATTR_IFINDEX, _U32.pack(index)),
        )
        if not self._send(request):
            return None
        response = self._recv()
        if response is None or len(response) <= NLMSG_HDRLEN + GENL_HDRLEN:
            return None
        ssid = find_attr(NL80211_ATTR_SSID, response[NLMSG_HDRLEN + GENL_HDRLEN:])
        if ssid is None:
            return None
        return ssid.decode("utf-8", errors="replace")

    def signal_percent(self, interface: str) -> Optional[str]:
        """Return the average signal of the station ``interface`` talks to, in percent."""
        index = self._index(interface)
        if index is None:
            return None
        family = self.family_id()
        if not family:
            warn("nl80211 family not found")
            return None
        request = self._message(
            family,
            NLM_F_REQUEST | NLM_F_DUMP,
            NL80211_CMD_GET_STATION,
            _attr(NL80211_ATTR_IFINDEX, _U32.pack(index)),
        )
        if not self._send(request):
            return None

        strength = ""
        while True:
            response = self._recv()
            if response is None or len(response) < _NLMSGHDR.size:
                return None
            for msg_len, msg_type, body in _messages(response):
                if not strength and msg_len > NLMSG_HDRLEN + GENL_HDRLEN:
                    sta_info = find_attr(NL80211_ATTR_STA_INFO, body)
                    signal = None
                    if sta_info is not None:
                        signal = find_attr(NL80211_STA_INFO_SIGNAL_AVG, sta_info)
                    if signal is not None and len(signal) == 1:
                        strength = str(rssi_to_perc(_S8.unpack(signal)[0]))
                if msg_type in (NLMSG_DONE, NLMSG_ERROR):
                    return strength or None


def _messages(response: bytes):
    """Yield (length, type, attributes) for each netlink message in ``response``."""
    pos = 0
    total = len(response)
    while pos != total and total - pos >= _NLMSGHDR.size:
        msg_len, msg_type, _, _, _ = _NLMSGHDR.unpack_from(response, pos)
        end = total if total - pos < msg_len else pos + msg_len
        yield msg_len, msg_type, response[pos + NLMSG_HDRLEN + GENL_HDRLEN:end]
        if end <= pos:
            break
        pos = end


@functools.lru_cache(maxsize=None)
def _shared() -> Nl80211:
    return Nl80211()


def wifi_essid(interface: str) -> Optional[str]:
    """Return the SSID of ``interface``."""
    return _shared().essid(interface)


def wifi_perc(interface: str) -> Optional[str]:
    """Return the signal strength of ``interface`` in percent."""
    return _shared().signal_percent(interface)