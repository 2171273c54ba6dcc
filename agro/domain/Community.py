"""Community board: posts, partner stores and farmers on the map (read-only)."""
from typing import List, Optional


class CommunityPost:
    def __init__(self, id: int, author: str, avatar_url: str, timestamp: str, content: str,
                 image_url: Optional[str] = None, likes: int = 0, comments: int = 0):
        self.id = id
        self.author = author
        self.avatar_url = avatar_url
        self.timestamp = timestamp
        self.content = content
        self.image_url = image_url
        self.likes = likes
        self.comments = comments

    @staticmethod
    def from_dict(data):
        return CommunityPost(**dict(data))

    def to_dict(self):
        return dict(vars(self))


class PartnerStore:
    def __init__(self, id: int, name: str, address: str, website: str, lat: float, lng: float):
        self.id = id
        self.name = name
        self.address = address
        self.website = website
        self.lat = lat
        self.lng = lng

    @staticmethod
    def from_dict(data):
        return PartnerStore(**dict(data))

    def to_dict(self):
        return dict(vars(self))


class CommunityUser:
    def __init__(self, id: int, name: str, bio: str, lat: float, lng: float):
        self.id = id
        self.name = name
        self.bio = bio
        self.lat = lat
        self.lng = lng

    @staticmethod
    def from_dict(data):
        return CommunityUser(**dict(data))

    def to_dict(self):
        return dict(vars(self))


class CommunityBoard:
    def __init__(self, posts: List[CommunityPost], stores: List[PartnerStore], users: List[CommunityUser]):
        self.posts = list(posts)
        self.stores = list(stores)
        self.users = list(users)

    def map_points(self):
        '''
        Stores and farmers as markers for the AgroHunter map.
        '''
        points = [dict(s.to_dict(), kind="store") for s in self.stores]
        points += [dict(u.to_dict(), kind="user") for u in self.users]
        return points

    @staticmethod
    def from_dict(data):
        d = dict(data or {})
        return CommunityBoard(
            [CommunityPost.from_dict(p) for p in d.get("posts", [])],
            [PartnerStore.from_dict(s) for s in d.get("stores", [])],
            [CommunityUser.from_dict(u) for u in d.get("users", [])],
        )
