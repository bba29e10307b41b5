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
.. module:: devops_clients.registry
    :platform: Unix, Windows
    :synopsis: Docker Registry HTTP API v2 client

Registries that use token authentication answer an anonymous request with
``401 Unauthorized`` and a challenge such as::

    WWW-Authenticate: Bearer realm="https://auth.docker.io/token",
                      service="registry.docker.io",
                      scope="repository:library/alpine:pull"

:meth:`Registry.token` exchanges that challenge for a bearer token, which is
then handed to :meth:`Registry.digest` and :meth:`Registry.blob`. An empty
token means the registry let the anonymous request through and no
``Authorization`` header is sent.

Example::

    >>> registry = create_registry_client('', '', '', 'docker.io')
    >>> image = parse_image('alpine:latest')
    >>> token = registry.token(registry.get_digest_url(image))
    >>> image.digest = registry.digest(image, token)
    >>> config = json.loads(registry.blob(image, token))
    >>> print(config['architecture'])
    amd64
'''

import gzip
import json
import logging
import re
from urllib.parse import urlparse

import requests

from devops_clients import transport

DEFAULT_DOCKER_REGISTRY = 'https://registry-1.docker.io'
DEFAULT_DOCKER_DOMAIN = 'docker.io'
LEGACY_DOCKER_DOMAIN = 'index.docker.io'
DEFAULT_TAG = 'latest'
DEFAULT_TIMEOUT = 30
MEDIA_TYPE_MANIFEST = 'application/vnd.docker.distribution.manifest.v2+json'
LOGIN_SUCCEEDED = 'Login Succeeded'

# REST Endpoints
API_VERSION_CHECK = '/v2/'
MANIFEST = '/v2/%s/manifests/%s'
BLOB = '/v2/%s/blobs/%s'

BEARER_REGEX = re.compile(r'^\s*Bearer\s+(.*)$', re.IGNORECASE)
BASIC_REGEX = re.compile(r'^\s*Basic\s+.*$', re.IGNORECASE)
# key=value or key="quoted \"value\""
CHALLENGE_PARAM_REGEX = re.compile(
    r'([A-Za-z][\w-]*)\s*=\s*(?:"((?:[^"\\]|\\.)*)"|([^\s,"]*))')
PROTOCOL_REGEX = re.compile(r'^https?://')


class RegistryException(Exception):
    '''General exception type for registry-API-related failures.'''
    pass


class BasicAuthRequiredException(RegistryException):
    '''The registry asked for basic rather than bearer token authentication.'''
    pass


class UnexpectedStatusException(RegistryException):
    '''A special exception to call out an HTTP status the client can't handle.'''

    def __init__(self, status_code, url):
        super(UnexpectedStatusException, self).__init__(
            'got status code: %d for url: %s' % (status_code, url))
        self.status_code = status_code
        self.url = url


class Image(object):
    '''A registry artifact.

    ``tag`` is the manifest reference: a tag name or, for digest pinned
    references such as ``alpine@sha256:...``, the manifest digest.
    ``digest`` holds the config blob digest and an image with a non-empty
    ``digest`` is already resolved.
    '''

    def __init__(self, domain, path, tag=DEFAULT_TAG, digest=''):
        self.domain = domain
        self.path = path
        self.tag = tag
        self.digest = digest

    def reference(self):
        return self.digest or self.tag

    def __eq__(self, other):
        return (isinstance(other, Image) and
                (self.domain, self.path, self.tag, self.digest) ==
                (other.domain, other.path, other.tag, other.digest))

    def __ne__(self, other):
        return not self == other

    def __repr__(self):
        return 'Image(%r, %r, tag=%r, digest=%r)' % (
            self.domain, self.path, self.tag, self.digest)

    def __str__(self):
        # tags never contain a colon, manifest digests always do
        sep = '@' if ':' in self.tag else ':'
        name = '%s/%s%s%s' % (self.domain, self.path, sep, self.tag)
        if self.digest:
            name += '@' + self.digest
        return name


class AuthChallenge(object):
    '''Parameters of a ``WWW-Authenticate: Bearer`` challenge.'''

    def __init__(self, realm, service='', scope=None):
        self.realm = realm
        self.service = service
        self.scope = list(scope or [])

    def __eq__(self, other):
        return (isinstance(other, AuthChallenge) and
                (self.realm, self.service, self.scope) ==
                (other.realm, other.service, other.scope))

    def __ne__(self, other):
        return not self == other

    def __repr__(self):
        return 'AuthChallenge(%r, %r, %r)' % (
            self.realm, self.service, self.scope)


class AuthConfig(object):

    def __init__(self, username='', password='', server_address=''):
        self.username = username
        self.password = password
        self.server_address = server_address


class RegistryOptions(object):
    '''Options for a new :class:`Registry`.

    :param domain: registry host, with or without scheme, ``str``
    :param timeout: per-request timeout in secs, ``int``
    :param headers: extra headers sent with every request, ``dict``
    :param use_ssl: scheme for domains given without one, ``bool``
    '''

    def __init__(self, domain='', timeout=DEFAULT_TIMEOUT, headers=None,
                 use_ssl=True):
        self.domain = domain
        self.timeout = timeout
        self.headers = headers or {}
        self.use_ssl = use_ssl


def parse_image(name):
    '''Parse a docker image reference into an :class:`Image`.

    Follows the docker CLI normalization: references without a registry
    host live on ``docker.io`` and official images gain the ``library/``
    prefix.

    :param name: image reference, e.g. ``harbor.local/ns/app:v1``, ``str``
    :returns: :class:`Image`
    '''
    remainder = (name or '').strip()
    if not remainder:
        raise RegistryException('image name must not be empty')

    manifest_digest = ''
    if '@' in remainder:
        remainder, manifest_digest = remainder.split('@', 1)
        if not manifest_digest:
            raise RegistryException('invalid image name: %s' % name)

    domain = DEFAULT_DOCKER_DOMAIN
    parts = remainder.split('/', 1)
    if len(parts) == 2 and ('.' in parts[0] or ':' in parts[0] or
                            parts[0] == 'localhost'):
        domain, remainder = parts
    if domain == LEGACY_DOCKER_DOMAIN:
        domain = DEFAULT_DOCKER_DOMAIN

    tag = ''
    colon = remainder.rfind(':')
    if colon > remainder.rfind('/'):
        remainder, tag = remainder[:colon], remainder[colon + 1:]

    if not remainder:
        raise RegistryException('invalid image name: %s' % name)
    if domain == DEFAULT_DOCKER_DOMAIN and '/' not in remainder:
        remainder = 'library/' + remainder

    # a manifest digest pins the manifest and takes precedence over the tag
    return Image(domain, remainder, manifest_digest or tag or DEFAULT_TAG)


def parse_auth_challenge(header):
    '''Parse the value of a ``WWW-Authenticate`` header.

    :param header: header value, ``str``
    :returns: :class:`AuthChallenge`
    :throws: :class:`BasicAuthRequiredException` for basic challenges,
        :class:`RegistryException` for anything else that isn't a bearer
        challenge
    '''
    if BASIC_REGEX.match(header):
        raise BasicAuthRequiredException('basic auth required')

    match = BEARER_REGEX.match(header)
    if not match:
        raise RegistryException(
            'unsupported authentication challenge: %s' % header)

    params = {}
    scope = []
    for param in CHALLENGE_PARAM_REGEX.finditer(match.group(1)):
        key = param.group(1).lower()
        if param.group(2) is not None:
            value = re.sub(r'\\(.)', r'\1', param.group(2))
        else:
            value = param.group(3)
        if key == 'scope':
            scope.extend(value.split())
        else:
            params[key] = value

    return AuthChallenge(params.get('realm', ''), params.get('service', ''),
                         scope)


def get_resp_body(response):
    '''Return the body of a streamed ``requests.Response``.

    The body is read undecoded and gunzipped here when the server sent it
    with ``Content-Encoding: gzip``.

    :param response: response of a request sent with ``stream=True``
    :returns: ``bytes``
    '''
    body = response.raw.read(decode_content=False)
    if response.headers.get('Content-Encoding', '').lower() == 'gzip':
        return gzip.decompress(body)
    return body


def _default_registry(server_address):
    if not server_address or server_address == DEFAULT_DOCKER_DOMAIN:
        return DEFAULT_DOCKER_REGISTRY
    return server_address


def _with_scheme(address, use_ssl):
    address = address.rstrip('/')
    if PROTOCOL_REGEX.match(address):
        return address
    return ('https://' if use_ssl else 'http://') + address


def get_auth_config(username, password, registry, logger=None):
    '''Build the :class:`AuthConfig` for a registry.

    Credentials are only kept when username, password and registry are all
    given.

    :param registry: registry address, ``docker.io`` or empty means
        Docker Hub, ``str``
    :returns: :class:`AuthConfig`
    '''
    logger = logger or logging.getLogger(__name__)
    registry = _default_registry(registry)
    if username and password and registry:
        return AuthConfig(username, password, registry)

    logger.info('Using registry %s with no authentication', registry)
    return AuthConfig(server_address=registry)


def create_registry_client(auth_url, username, password, domain,
                           use_ssl=True, logger=None):
    '''Create a :class:`Registry` for ``domain``.

    :param auth_url: address the credentials belong to, defaults to
        ``domain`` when empty, ``str``
    :param username: registry username, ``str``
    :param password: registry password, ``str``
    :param domain: registry host, ``str``
    :returns: :class:`Registry`
    '''
    logger = logger or logging.getLogger(__name__)
    auth = get_auth_config(username, password, auth_url or domain, logger)

    logger.info('domain: %s', domain)
    logger.info('server address: %s', auth.server_address)

    return Registry(auth, RegistryOptions(domain=domain, use_ssl=use_ssl),
                    logger=logger)


class Registry(object):

    def __init__(self, auth, opt=None, session=None, logger=None):
        '''Create handle to a Docker registry.

        :param auth: credentials and server address, :class:`AuthConfig`
        :param opt: :class:`RegistryOptions`
        :param session: ``requests.Session`` to send requests with
        :param logger: ``logging.Logger``, defaults to this module's logger
        '''
        self.opt = opt or RegistryOptions()
        self.logger = logger or logging.getLogger(__name__)

        server_address = _default_registry(auth.server_address)
        domain = self.opt.domain
        if not domain or domain == DEFAULT_DOCKER_DOMAIN:
            domain = server_address

        self.url = _with_scheme(domain, self.opt.use_ssl)
        self.auth_url = _with_scheme(server_address, self.opt.use_ssl)
        self.domain = PROTOCOL_REGEX.sub('', self.url)
        self.username = auth.username
        self.password = auth.password
        self.timeout = self.opt.timeout
        self._session = session or transport.create_session(
            self.opt.headers, self.logger)

    def _url(self, path_template, *args):
        return '%s%s' % (self.url, path_template % args)

    def get_digest_url(self, image):
        '''Manifest URL of ``image``, ``str``.'''
        return self._url(MANIFEST, image.path, image.tag)

    def get_blob_url(self, image):
        '''Blob URL of ``image``'s resolved digest, ``str``.'''
        return self._url(BLOB, image.path, image.digest)

    def _basic_auth(self):
        if self.username and self.password:
            return requests.auth.HTTPBasicAuth(
                self.username.encode('utf-8'), self.password.encode('utf-8'))
        return None

    def _get(self, url, headers=None, params=None, auth=None):
        return self._session.get(url, headers=headers, params=params,
                                 auth=auth, timeout=self.timeout,
                                 stream=True)

    def _manifest_headers(self, token):
        headers = {'Accept': MEDIA_TYPE_MANIFEST}
        if token:
            headers['Authorization'] = 'Bearer %s' % token
        return headers

    def _challenge(self, url):
        with self._get(url) as response:
            return (response.status_code,
                    response.headers.get('WWW-Authenticate', ''))

    def token(self, url):
        '''Resolve a bearer token for ``url``.

        :param url: URL the token will be used for, ``str``
        :returns: bearer token, ``str``; empty when the registry needs none
        :throws: :class:`BasicAuthRequiredException` when the registry asks
            for basic authentication
        '''
        status, header = self._challenge(url)
        if status == 200:
            return ''
        if status != 401:
            raise UnexpectedStatusException(status, url)
        if not header:
            raise RegistryException(
                'registry[%s] returned 401 without an authentication '
                'challenge' % self.domain)

        return self._fetch_token(parse_auth_challenge(header))

    def _fetch_token(self, challenge):
        realm = urlparse(challenge.realm)
        if not realm.scheme or not realm.netloc:
            raise RegistryException(
                'invalid token realm: %s' % challenge.realm)

        params = []
        if challenge.service:
            params.append(('service', challenge.service))
        params.extend(('scope', scope) for scope in challenge.scope)

        with self._get(challenge.realm, params=params,
                       auth=self._basic_auth()) as response:
            if response.status_code != 200:
                raise UnexpectedStatusException(response.status_code,
                                                challenge.realm)
            body = json.loads(get_resp_body(response))

        if not isinstance(body, dict):
            raise RegistryException(
                'token endpoint[%s] returned an invalid response'
                % challenge.realm)
        token = body.get('token') or body.get('access_token')
        if not token:
            raise RegistryException(
                'token endpoint[%s] returned no token' % challenge.realm)
        return token

    def digest(self, image, token=''):
        '''Get the config digest of ``image``.

        Returns ``image.digest`` untouched when it is already set.

        :param image: :class:`Image`
        :param token: bearer token from :meth:`token`, ``str``
        :returns: digest such as ``sha256:...``, ``str``; empty when the
            registry answered 404
        :throws: :class:`RegistryException` when the manifest is not a json
            object
        '''
        if image.digest:
            return image.digest

        url = self.get_digest_url(image)
        self.logger.info('registry.manifests.get url=%s', url)

        with self._get(url, headers=self._manifest_headers(token)) as response:
            if response.status_code == 404:
                return ''
            if response.status_code != 200:
                raise UnexpectedStatusException(response.status_code, url)
            manifest = json.loads(get_resp_body(response))

        if not isinstance(manifest, dict):
            raise RegistryException(
                'invalid manifest of image[%s]: not an object' % image)
        config = manifest.get('config') or {}
        if not isinstance(config, dict):
            raise RegistryException(
                'invalid manifest of image[%s]: config is not an object'
                % image)
        return config.get('digest', '')

    def blob(self, image, token=''):
        '''Get the blob of ``image``'s resolved digest.

        :param image: :class:`Image` with ``digest`` set
        :param token: bearer token from :meth:`token`, ``str``
        :returns: decoded response body, ``bytes``
        '''
        url = self.get_blob_url(image)
        self.logger.info('registry.blobs.get url=%s', url)

        with self._get(url, headers=self._manifest_headers(token)) as response:
            if response.status_code not in (200, 404):
                raise UnexpectedStatusException(response.status_code, url)
            return get_resp_body(response)

    def verify_login(self):
        '''Check that the registry accepts the configured credentials.

        :returns: ``'Login Succeeded'``
        :throws: :class:`RegistryException` when the login is rejected
        '''
        url = self._url(API_VERSION_CHECK)
        status, header = self._challenge(url)
        if status == 200:
            return LOGIN_SUCCEEDED
        if status != 401:
            raise UnexpectedStatusException(status, url)
        if not header:
            raise RegistryException(
                'registry[%s] returned 401 without an authentication '
                'challenge' % self.domain)

        try:
            challenge = parse_auth_challenge(header)
        except BasicAuthRequiredException:
            auth = self._basic_auth()
            if auth is None:
                raise
            with self._get(url, auth=auth) as response:
                if response.status_code != 200:
                    raise UnexpectedStatusException(response.status_code, url)
        else:
            self._fetch_token(challenge)

        return LOGIN_SUCCEEDED
