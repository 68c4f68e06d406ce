"""
Resource Reconciler - converge one NetBox object to its declared LocalState.

State machine:
    ABSENT  --create-->  PRESENT  (then read)
    PRESENT --update-->  PRESENT  (then read)
    PRESENT --delete-->  ABSENT
    PRESENT --read/404-> ABSENT   (drift, no error)

Every successful write is followed by a read so LocalState reflects what
NetBox actually stored, including server-side normalization.
"""

import logging
from typing import Any

from nbrecon.core.exceptions import InvalidStateError, RemoteNotFound
from nbrecon.schemas.resource import AttrType, ResourceSpec
from nbrecon.sync.field_mapper import FieldMapper
from nbrecon.sync.models import LocalState, RemoteRecord
from nbrecon.sync.tags import TagSynchronizer
from nbrecon.tools.base import InventoryAPI

logger = logging.getLogger(__name__)


class ResourceReconciler:
    """
    CRUD reconciler for one resource type.

    The NetBox client is passed to every call; the reconciler keeps no state
    between calls.

    Usage:
        reconciler = ResourceReconciler(VLAN_GROUP)
        state = LocalState.from_config(VLAN_GROUP, {"name": "core", "slug": "core", "tags": ["net"]})
        reconciler.create(client, state)
    """

    def __init__(
        self,
        spec: ResourceSpec,
        mapper: FieldMapper | None = None,
        tags: TagSynchronizer | None = None,
    ) -> None:
        """
        Initialize ResourceReconciler.

        Args:
            spec: Resource descriptor
            mapper: Field mapper (default: built from spec)
            tags: Tag synchronizer (default: NetBox tag catalogue)
        """
        self.spec = spec
        self.mapper = mapper or FieldMapper(spec)
        self.tags = tags or TagSynchronizer()

    def changes(self, desired: LocalState, current: LocalState) -> dict[str, tuple[Any, Any]]:
        """
        Attributes whose declared value differs from the remote one.

        Only explicitly configured, non-computed attributes are compared;
        sets compare as unordered sets.

        Returns:
            Mapping of attribute name to (desired, current)
        """
        diff: dict[str, tuple[Any, Any]] = {}
        for attr in self.spec.writable:
            if attr.name not in desired.explicit:
                continue
            want = desired.get(attr.name, attr.zero_value)
            have = current.get(attr.name, attr.zero_value)
            if want != have:
                diff[attr.name] = (want, have)
        return diff

    def _payload(self, client: InventoryAPI, state: LocalState) -> dict:
        """Validate, resolve tag sets and map to a full-replace payload."""
        self.mapper.validate(state)
        references = {
            attr.name: self.tags.apply(client, state.get(attr.name) or ())
            for attr in self.spec.writable
            if attr.type is AttrType.TAGS
        }
        return self.mapper.to_remote(state, references)

    def create(self, client: InventoryAPI, state: LocalState) -> LocalState:
        """
        Create the remote object and read it back.

        Raises:
            InvalidStateError: State already has an id
            ValidationError: Local attributes are invalid (nothing sent)
            RemoteError: NetBox rejected or failed the request (id stays empty)
        """
        if state.id:
            raise InvalidStateError(f"{self.spec.kind} {state.id} already exists; use update")

        payload = self._payload(client, state)
        created = client.create(self.spec.endpoint, payload)
        record = RemoteRecord.from_payload(created)
        state.id = str(record.id)
        logger.info(f"Created {self.spec.kind} id={state.id}")

        return self.read(client, state)

    def read(self, client: InventoryAPI, state: LocalState) -> LocalState:
        """
        Refresh state from NetBox.

        A 404 means the object was removed out of band: the id is cleared and
        no error is raised. Reading an ABSENT state is a no-op.
        """
        if not state.id:
            return state

        try:
            data = client.get(self.spec.endpoint, int(state.id))
        except RemoteNotFound:
            logger.warning(f"{self.spec.kind} id={state.id} not found in NetBox; marking absent")
            state.clear_id()
            return state

        fresh = self.mapper.from_remote(RemoteRecord.from_payload(data))
        state.attributes = fresh.attributes
        return state

    def update(self, client: InventoryAPI, state: LocalState) -> LocalState:
        """
        Replace the remote object with the declared state and read it back.

        Raises:
            InvalidStateError: State has no id
            ValidationError: Local attributes are invalid (nothing sent)
            RemoteError: NetBox rejected or failed the request
        """
        if not state.id:
            raise InvalidStateError(f"{self.spec.kind} has no id; use create")

        payload = self._payload(client, state)
        client.update(self.spec.endpoint, int(state.id), payload)
        logger.info(f"Updated {self.spec.kind} id={state.id}")

        return self.read(client, state)

    def delete(self, client: InventoryAPI, state: LocalState) -> LocalState:
        """
        Delete the remote object.

        On failure the id is kept, so the object is still assumed present.
        """
        if not state.id:
            raise InvalidStateError(f"{self.spec.kind} has no id; nothing to delete")

        client.delete(self.spec.endpoint, int(state.id))
        logger.info(f"Deleted {self.spec.kind} id={state.id}")
        state.clear_id()
        return state

    def import_state(self, client: InventoryAPI, remote_id: int) -> LocalState:
        """
        Adopt an existing NetBox object by id.

        Every non-computed attribute counts as explicitly set afterwards.

        Raises:
            RemoteNotFound: No object with that id
        """
        state = LocalState(kind=self.spec.kind, id=str(remote_id))
        self.read(client, state)
        if not state.id:
            raise RemoteNotFound(
                f"{self.spec.kind} {remote_id} not found",
                status_code=404,
                method="GET",
                path=f"{self.spec.endpoint.rstrip('/')}/{remote_id}/",
            )
        state.explicit = {attr.name for attr in self.spec.writable}
        return state
