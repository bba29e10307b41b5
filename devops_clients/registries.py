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
.. module:: devops_clients.registries
    :platform: Unix, Windows
    :synopsis: Image lookups and login checks for registries configured in
               Kubernetes secrets
'''

import base64
import json
import logging

import requests

from devops_clients import registry

SECRET_TYPE_DOCKER_CONFIG_JSON = 'kubernetes.io/dockerconfigjson'
DOCKER_CONFIG_JSON_KEY = '.dockerconfigjson'

STATUS_FAILED = 'failed'
STATUS_SUCCEEDED = 'succeeded'


class DockerConfigEntry(object):
    '''One ``auths`` entry of a docker config file.'''

    def __init__(self, username='', password='', email='', server_address=''):
        self.username = username
        self.password = password
        self.email = email
        self.server_address = server_address


class AuthInfo(object):

    def __init__(self, username, password, server_host):
        self.username = username
        self.password = password
        self.server_host = server_host


class ImageBlob(object):
    '''Image configuration as stored in the config blob of a schema2
    manifest.'''

    def __init__(self, architecture='', os='', config=None,
                 container_config=None, container='', created='',
                 docker_version='', history=None, rootfs=None):
        self.architecture = architecture
        self.os = os
        self.config = config or {}
        self.container_config = container_config or {}
        self.container = container
        self.created = created
        self.docker_version = docker_version
        self.history = history or []
        self.rootfs = rootfs or {}

    @classmethod
    def from_dict(cls, data):
        return cls(architecture=data.get('architecture', ''),
                   os=data.get('os', ''),
                   config=data.get('config'),
                   container_config=data.get('container_config'),
                   container=data.get('container', ''),
                   created=data.get('created', ''),
                   docker_version=data.get('docker_version', ''),
                   history=data.get('history'),
                   rootfs=data.get('rootfs'))

    @property
    def env(self):
        return self.config.get('Env') or []

    @property
    def cmd(self):
        return self.config.get('Cmd') or []

    @property
    def entrypoint(self):
        return self.config.get('Entrypoint') or []

    @property
    def labels(self):
        return self.config.get('Labels') or {}

    @property
    def diff_ids(self):
        return self.rootfs.get('diff_ids') or []

    def to_dict(self):
        return {
            'architecture': self.architecture,
            'os': self.os,
            'config': self.config,
            'container_config': self.container_config,
            'container': self.container,
            'created': self.created,
            'docker_version': self.docker_version,
            'history': self.history,
            'rootfs': self.rootfs,
        }


class ImageBlobInfo(object):

    def __init__(self, status, image=None):
        self.status = status
        self.image = image

    def to_dict(self):
        info = {'status': self.status}
        if self.image is not None:
            info['imageBlob'] = self.image.to_dict()
        return info


def get_docker_entry_from_secret(secret):
    '''Extract registry credentials from a ``kubernetes.io/dockerconfigjson``
    secret.

    A secret without a type yields an empty entry, i.e. anonymous access.

    :param secret: secret as returned by the Kubernetes API, values of
        ``data`` base64 encoded, ``dict``
    :returns: :class:`DockerConfigEntry`
    '''
    secret = secret or {}
    secret_type = secret.get('type', '')
    if not secret_type:
        return DockerConfigEntry()

    if secret_type != SECRET_TYPE_DOCKER_CONFIG_JSON:
        metadata = secret.get('metadata') or {}
        raise registry.RegistryException(
            'secret %s in ns %s type should be %s'
            % (metadata.get('name', ''), metadata.get('namespace', ''),
               SECRET_TYPE_DOCKER_CONFIG_JSON))

    data = secret.get('data') or {}
    if DOCKER_CONFIG_JSON_KEY not in data:
        raise registry.RegistryException(
            'could not get data %s' % DOCKER_CONFIG_JSON_KEY)

    docker_config = json.loads(base64.b64decode(data[DOCKER_CONFIG_JSON_KEY]))
    if not isinstance(docker_config, dict):
        raise registry.RegistryException(
            'data %s should be a json object' % DOCKER_CONFIG_JSON_KEY)
    auths = docker_config.get('auths') or {}
    if not isinstance(auths, dict):
        raise registry.RegistryException(
            'docker config auths should be a json object')
    if not auths:
        raise registry.RegistryException(
            'docker config auth len should not be 0')

    server_address, entry = next(iter(auths.items()))
    if not isinstance(entry, dict):
        raise registry.RegistryException(
            'docker config auth of %s should be a json object'
            % server_address)
    return DockerConfigEntry(username=entry.get('username', ''),
                             password=entry.get('password', ''),
                             email=entry.get('email', ''),
                             server_address=server_address)


def registry_image_blob(image_name, secret, logger=None):
    '''Look up the configuration of an image.

    Failures are logged and reported through the returned status.

    :param image_name: image reference, ``str``
    :param secret: pull secret for the registry, ``dict`` or ``None``
    :returns: :class:`ImageBlobInfo`
    '''
    logger = logger or logging.getLogger(__name__)
    try:
        entry = get_docker_entry_from_secret(secret)
        image = registry.parse_image(image_name)
        client = registry.create_registry_client(
            '', entry.username, entry.password, image.domain, logger=logger)

        token = client.token(client.get_digest_url(image))
        image.digest = client.digest(image, token)
        if not image.digest:
            raise registry.RegistryException(
                'manifest of image[%s] not found' % image_name)
        blob = json.loads(client.blob(image, token))
        if not isinstance(blob, dict):
            raise registry.RegistryException(
                'config blob of image[%s] is not a json object' % image_name)
        image_blob = ImageBlob.from_dict(blob)
    except (registry.RegistryException, requests.RequestException,
            ValueError) as e:
        logger.error('Failed to get blob of image[%s]: %s', image_name, e)
        return ImageBlobInfo(STATUS_FAILED)

    return ImageBlobInfo(STATUS_SUCCEEDED, image_blob)


def registry_verify(auth_info, logger=None):
    '''Verify that a registry accepts a login.

    :param auth_info: :class:`AuthInfo`
    :throws: :class:`devops_clients.registry.RegistryException` when the
        login is rejected
    '''
    client = registry.create_registry_client(
        auth_info.server_host, auth_info.username, auth_info.password,
        auth_info.server_host, logger=logger)
    client.verify_login()
