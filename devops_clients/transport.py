#!/usr/bin/env python
# Software License Agreement (BSD License)
#
# Copyright (c) 2026 DevOps Clients Developers
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions
# are met:
#
#  * Redistributions of source code must retain the above copyright
#    notice, this list of conditions and the following disclaimer.
#  * Redistributions in binary form must reproduce the above
#    copyright notice, this list of conditions and the following
#    disclaimer in the documentation and/or other materials provided
#    with the distribution.
#  * Neither the name of Willow Garage, Inc. nor the names of its
#    contributors may be used to endorse or promote products derived
#    from this software without specific prior written permission.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS
# 'AS IS' AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT
# LIMITED TO, THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS
# FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE
# COPYRIGHT OWNER OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT,
# INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING,
# BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES;
# LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER
# CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT
# LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN
# ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE
# POSSIBILITY OF SUCH DAMAGE.
#

'''
.. module:: devops_clients.transport
    :platform: Unix, Windows
    :synopsis: HTTP session shared by the Jenkins and registry clients
'''

import logging
import os

import requests
from requests.packages.urllib3.exceptions import InsecureRequestWarning


class WrappedSession(requests.Session):
    """A wrapper for requests.Session to override 'verify' property, ignoring REQUESTS_CA_BUNDLE environment variable.

    This is a workaround for https://github.com/kennethreitz/requests/issues/3829 (will be fixed in requests 3.0.0)
    """

    def merge_environment_settings(self, url, proxies, stream, verify, *args,
                                   **kwargs):
        if self.verify is False:
            verify = False

        return super(WrappedSession, self).merge_environment_settings(url,
                                                                      proxies,
                                                                      stream,
                                                                      verify,
                                                                      *args,
                                                                      **kwargs)


def parse_extra_headers(value):
    '''Parse newline separated ``Header: value`` pairs.

    Lines without a colon are ignored.

    :param value: raw header block, ``str``
    :returns: ``dict`` of header names to values
    '''
    headers = {}
    for token in (value or '').split("\n"):
        if ":" in token:
            header, val = token.split(":", 1)
            headers[header.strip()] = val.strip()
    return headers


def create_session(headers=None, logger=None):
    '''Create a :class:`WrappedSession` for talking to a remote server.

    :param headers: extra headers sent with every request, ``dict``
    :param logger: logger used for configuration messages
    :returns: :class:`WrappedSession`
    '''
    logger = logger or logging.getLogger(__name__)
    session = WrappedSession()

    if headers:
        session.headers.update(headers)

    if os.getenv('PYTHONHTTPSVERIFY', '1') == '0':
        logger.debug('PYTHONHTTPSVERIFY=0 detected so we will '
                     'disable requests library SSL verification to keep '
                     'compatibility with older versions.')
        requests.packages.urllib3.disable_warnings(InsecureRequestWarning)
        session.verify = False

    return session
