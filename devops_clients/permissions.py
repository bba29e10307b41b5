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
.. module:: devops_clients.permissions
    :platform: Unix, Windows
    :synopsis: Permission ids of the Jenkins role-strategy plugin

Roles are granted permissions through named flags; the tables below map each
flag to the permission id Jenkins expects on the wire.

Example::

    >>> permission_ids(PROJECT_PERMISSIONS, ['item_build', 'item_read'])
    ['hudson.model.Item.Build', 'hudson.model.Item.Read']
'''

from collections import OrderedDict

GLOBAL_ROLE = 'globalRoles'
PROJECT_ROLE = 'projectRoles'

GLOBAL_PERMISSIONS = OrderedDict([
    ('administer', 'hudson.model.Hudson.Administer'),
    ('global_read', 'hudson.model.Hudson.Read'),
    ('credential_create',
     'com.cloudbees.plugins.credentials.CredentialsProvider.Create'),
    ('credential_update',
     'com.cloudbees.plugins.credentials.CredentialsProvider.Update'),
    ('credential_view',
     'com.cloudbees.plugins.credentials.CredentialsProvider.View'),
    ('credential_delete',
     'com.cloudbees.plugins.credentials.CredentialsProvider.Delete'),
    ('credential_manage_domains',
     'com.cloudbees.plugins.credentials.CredentialsProvider.ManageDomains'),
    ('slave_create', 'hudson.model.Computer.Create'),
    ('slave_configure', 'hudson.model.Computer.Configure'),
    ('slave_delete', 'hudson.model.Computer.Delete'),
    ('slave_build', 'hudson.model.Computer.Build'),
    ('slave_connect', 'hudson.model.Computer.Connect'),
    ('slave_disconnect', 'hudson.model.Computer.Disconnect'),
    ('item_build', 'hudson.model.Item.Build'),
    ('item_create', 'hudson.model.Item.Create'),
    ('item_read', 'hudson.model.Item.Read'),
    ('item_configure', 'hudson.model.Item.Configure'),
    ('item_cancel', 'hudson.model.Item.Cancel'),
    ('item_move', 'hudson.model.Item.Move'),
    ('item_discover', 'hudson.model.Item.Discover'),
    ('item_workspace', 'hudson.model.Item.Workspace'),
    ('item_delete', 'hudson.model.Item.Delete'),
    ('run_update', 'hudson.model.Run.Update'),
    ('run_delete', 'hudson.model.Run.Delete'),
    ('view_create', 'hudson.model.View.Create'),
    ('view_configure', 'hudson.model.View.Configure'),
    ('view_read', 'hudson.model.View.Read'),
    ('view_delete', 'hudson.model.View.Delete'),
    ('scm_tag', 'hudson.scm.SCM.Tag'),
])

PROJECT_PERMISSIONS = OrderedDict([
    ('credential_create',
     'com.cloudbees.plugins.credentials.CredentialsProvider.Create'),
    ('credential_update',
     'com.cloudbees.plugins.credentials.CredentialsProvider.Update'),
    ('credential_view',
     'com.cloudbees.plugins.credentials.CredentialsProvider.View'),
    ('credential_delete',
     'com.cloudbees.plugins.credentials.CredentialsProvider.Delete'),
    ('credential_manage_domains',
     'com.cloudbees.plugins.credentials.CredentialsProvider.ManageDomains'),
    ('item_build', 'hudson.model.Item.Build'),
    ('item_create', 'hudson.model.Item.Create'),
    ('item_read', 'hudson.model.Item.Read'),
    ('item_configure', 'hudson.model.Item.Configure'),
    ('item_cancel', 'hudson.model.Item.Cancel'),
    ('item_move', 'hudson.model.Item.Move'),
    ('item_discover', 'hudson.model.Item.Discover'),
    ('item_workspace', 'hudson.model.Item.Workspace'),
    ('item_delete', 'hudson.model.Item.Delete'),
    ('run_update', 'hudson.model.Run.Update'),
    ('run_delete', 'hudson.model.Run.Delete'),
    ('run_replay', 'hudson.model.Run.Replay'),
    ('scm_tag', 'hudson.scm.SCM.Tag'),
])


def permission_ids(table, flags):
    '''Translate permission flags into permission ids.

    :param table: :data:`GLOBAL_PERMISSIONS` or :data:`PROJECT_PERMISSIONS`
    :param flags: granted flag names, or a ``dict`` of flag name to ``bool``
    :returns: permission ids in table order, ``list``
    :throws: ``KeyError`` naming the first unknown flag
    '''
    if isinstance(flags, dict):
        granted = set(name for name, value in flags.items() if value)
    else:
        granted = set(flags)
    for name in flags:
        if name not in table:
            raise KeyError(name)
    return [pid for name, pid in table.items() if name in granted]


def permission_flags(table, ids):
    '''Translate the permission ids Jenkins reports back into flags.

    Jenkins answers with a mapping of permission id to ``bool``; ids
    missing from ``table`` are ignored.

    :returns: ``dict`` of every flag in ``table`` to ``bool``
    '''
    if isinstance(ids, dict):
        granted = set(pid for pid, value in ids.items() if value)
    else:
        granted = set(ids or [])
    return OrderedDict((name, pid in granted) for name, pid in table.items())
