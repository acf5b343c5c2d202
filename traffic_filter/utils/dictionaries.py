# traffic_filter/utils/dictionaries.py

import os
import logging
from collections import namedtuple

import yaml

from traffic_filter.utils.helpers import deep_merge

logger = logging.getLogger(__name__)

OperatorLabel = namedtuple('OperatorLabel', ['symbol', 'label'])
LabelDictionaries = namedtuple('LabelDictionaries', ['fields', 'operators', 'vocabulary'])

DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'data')
BUNDLED_LABELS_ZH = os.path.join(DATA_DIR, 'labels_zh.yaml')

DEFAULT_FIELD_LABELS = {
    'http': 'HTTP protocol',
    'tcp': 'TCP protocol',
    'udp': 'UDP protocol',
    'arp': 'ARP protocol',
    'icmp': 'ICMP protocol',
    'dns': 'DNS protocol',
    'ssl': 'SSL/TLS protocol',
    'telnet': 'Telnet protocol',
    'tcp.port': 'TCP port',
    'tcp.flags.syn': 'TCP synchronize flag (SYN)',
    'http.host': 'HTTP host',
    'http.response.code': 'HTTP response code',
    'http.request.method': 'HTTP request method',
    'http.request.uri': 'HTTP request URI',
    'http.content_type': 'HTTP content type',
    'http.content_length': 'HTTP content length',
    'http.cookie': 'HTTP cookie',
    'dns.qry.name': 'DNS query name',
    'ssl.handshake.type': 'TLS handshake type',
    'sctp': 'SCTP protocol',
    'sctp.port': 'SCTP port',
    'sctp.chan': 'SCTP chunk type',
    'ipv6': 'IPv6 protocol',
    'ipv6.addr': 'IPv6 address',
    'ipv6.src': 'IPv6 source address',
    'ipv6.dst': 'IPv6 destination address',
    'icmpv6': 'ICMPv6 protocol',
    'igmp': 'IGMP multicast protocol',
    'ospf': 'OSPF routing protocol',
    'bgp': 'BGP routing protocol',
    'rip': 'RIP routing protocol',
    'ftp': 'FTP protocol',
    'ftp.request.command': 'FTP request command',
    'ftp.response.code': 'FTP response code',
    'smtp': 'SMTP protocol',
    'pop': 'POP protocol',
    'imap': 'IMAP protocol',
    'dhcp': 'DHCP protocol',
    'dhcp.option.hostname': 'DHCP hostname option',
    'dhcp.option.dhcp_server_id': 'DHCP server identifier option',
    'ntp': 'NTP protocol',
    'ntp.time': 'NTP timestamp',
    'snmp': 'SNMP protocol',
    'snmp.version': 'SNMP version',
    'snmp.community': 'SNMP community',
    'smb': 'SMB protocol',
    'smb2': 'SMB2 protocol',
    'rtsp': 'RTSP protocol',
    'sip': 'SIP protocol',
    'sip.Request-Line': 'SIP request line',
    'sip.Status-Line': 'SIP status line',
    'rtp': 'RTP protocol',
    'rtp.ssrc': 'RTP synchronization source',
    'rtp.payload_type': 'RTP payload type',
    'mysql': 'MySQL protocol',
    'mysql.query': 'MySQL query',
    'postgresql': 'PostgreSQL protocol',
    'redis': 'Redis protocol',
    'mqtt': 'MQTT protocol',
    'mqtt.msgtype': 'MQTT message type',
    'modbus': 'Modbus protocol',
    'modbus.func': 'Modbus function code',
    'http2': 'HTTP/2 protocol',
    'quic': 'QUIC protocol',
    'websocket': 'WebSocket protocol',
    'coap': 'CoAP protocol',
    'dtls': 'DTLS protocol',
    'ssh': 'SSH protocol',
    'ldap': 'LDAP protocol',
    'radius': 'RADIUS protocol',
    'tcp.flags.ack': 'TCP acknowledgment flag (ACK)',
    'tcp.flags.psh': 'TCP push flag (PSH)',
    'tcp.flags.fin': 'TCP finish flag (FIN)',
    'tcp.flags.rst': 'TCP reset flag (RST)',
    'tcp.flags.urg': 'TCP urgent flag (URG)',
    'tcp.flags.ece': 'TCP ECN echo flag (ECE)',
    'tcp.flags.cwr': 'TCP congestion window reduced flag (CWR)',
    'tcp.seq': 'TCP sequence number',
    'tcp.ack': 'TCP acknowledgment number',
    'tcp.window_size': 'TCP window size',
    'tcp.len': 'TCP payload length',
    'udp.port': 'UDP port',
    'udp.length': 'UDP length',
    'ip.addr': 'IP address',
    'ip.src': 'source IP address',
    'ip.dst': 'destination IP address',
    'ip.id': 'IP identification',
    'ip.ttl': 'IP time to live (TTL)',
    'ip.proto': 'IP protocol number',
    'ip.len': 'IP total length',
    'ip.hdr_len': 'IP header length',
    'ip.dsfield': 'IP differentiated services field',
    'eth': 'Ethernet',
    'eth.src': 'source MAC address',
    'eth.dst': 'destination MAC address',
    'eth.type': 'Ethernet type',
    'frame.time': 'capture time',
    'frame.number': 'frame number',
    'frame.interface_id': 'capture interface ID',
    'frame.len': 'frame length',
    'frame.cap_len': 'captured length',
}

DEFAULT_OPERATOR_LABELS = {
    '==': OperatorLabel('==', 'equals'),
    '!=': OperatorLabel('!=', 'does not equal'),
    'contains': OperatorLabel('contains', 'contains'),
    'matches': OperatorLabel('~ (matches)', 'matches the pattern'),
    '>': OperatorLabel('>', 'is greater than'),
    '<': OperatorLabel('<', 'is less than'),
    '>=': OperatorLabel('>=', 'is at least'),
    '<=': OperatorLabel('<=', 'is at most'),
    'exists': OperatorLabel('exists', 'is present'),
    '!': OperatorLabel('!', 'is absent'),
}

DEFAULT_VOCABULARY = {
    'and': 'and',
    'or': 'or',
    'capture': 'capture',
    'exclude': 'exclude',
    'empty': 'empty',
}


def as_operator_label(identifier, entry):
    if isinstance(entry, OperatorLabel):
        return entry
    if isinstance(entry, str):
        return OperatorLabel(identifier, entry)
    if isinstance(entry, dict) and 'label' in entry:
        return OperatorLabel(str(entry.get('symbol', identifier)), str(entry['label']))
    raise ValueError(f"Invalid label entry for operator {identifier!r}: {entry!r}")


def load_dictionaries(path=None):
    """
    Load field, operator and vocabulary labels for the translator.

    The YAML file may hold `fields`, `operators` and `vocabulary` mappings;
    whatever it provides is merged over the English defaults.
    """
    data = {
        'fields': dict(DEFAULT_FIELD_LABELS),
        'operators': dict(DEFAULT_OPERATOR_LABELS),
        'vocabulary': dict(DEFAULT_VOCABULARY),
    }

    if path and os.path.exists(path):
        with open(path, 'r', encoding='utf-8') as file:
            user_labels = yaml.safe_load(file)
        if user_labels:
            if not isinstance(user_labels, dict):
                raise ValueError(f"Label dictionary {path} must be a mapping")
            for section in ('fields', 'operators', 'vocabulary'):
                entries = user_labels.get(section) or {}
                if not isinstance(entries, dict):
                    raise ValueError(f"Section '{section}' in {path} must be a mapping")
                deep_merge(data[section], {str(key): value for key, value in entries.items()})
        logger.info(f"Loaded label dictionaries from {path}")
    elif path:
        logger.warning(f"Label dictionary not found at {path}, using defaults")

    operators = {
        identifier: as_operator_label(identifier, entry)
        for identifier, entry in data['operators'].items()
    }
    fields = {key: str(value) for key, value in data['fields'].items()}
    vocabulary = {key: str(value) for key, value in data['vocabulary'].items()}
    return LabelDictionaries(fields, operators, vocabulary)
